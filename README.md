# lielib

Matrix Lie group tools for robotics and state estimation, built on NumPy.
Vectors and matrices are plain `numpy` arrays; functions check the shapes
they are given and raise `ValueError` on a wrong shape.

## Modules

- `lielib.so2`: planar rotations. `exp_map`, `log_map`, `skew_symmetric`,
  `unhat`, `product_log_map`, and the `Rotation` class, built from an angle
  or a 2x2 matrix, with `theta`, `matrix`, `inverse`, composition with `*`
  (angles add) and `-` (angle difference), and the constant SO(2)
  Jacobians (`adjoint`, `left_jacobian`, `right_jacobian`, `jrv_r`,
  `jrv_v`, `jrinv_r`, `jqr_q`, `jqr_r`, `jrtheta_r`, `jrtheta_theta`,
  `jqminusr_q`, `jqminusr_r`).
- `lielib.so3`: 3D rotations. `so3_to_angle`, `exp_map`, `log_map`,
  `skew_symmetric`, `unhat`, `left_jacobian` / `right_jacobian` and their
  inverses, `j_jt` / `j_jt_inv`, `left_distance` / `right_distance`, the
  derivatives `drp_dphi` / `drp_dr`, and the `Rotation` class (built from an
  axis-angle vector or a 3x3 matrix; `matrix`, `vector`, `transpose`,
  `inverse`, `*`, and indexing such as `R[0, 1]`). `Rotation()` with no
  argument holds a zero vector and a zero matrix.
- `lielib.se2`: planar rigid motions. `exp_map`, `log_map`,
  `skew_symmetric`, `unhat`, and the `Pose` class: `Pose()` is the
  identity, `Pose(matrix)` wraps a 3x3 matrix, plus `Pose.from_twist` and
  `Pose.from_rotation` (angle, 2x2 matrix or `so2.Rotation`). Poses compose
  with `*`; `inverse()` and `adjoint()` return 3x3 matrices; `matrix`,
  `rotation`, `translation`, `angle` and `translation_pair` are properties.
- `lielib.se3`: 3D rigid motions. `lie_algebra_4d`, `skew_symmetric`,
  `unhat_6d`, `exp_map`, `left_q` / `right_q`, `left_jacobian` /
  `right_jacobian` and their inverses, `pose_jacobian`,
  `left_perturb_derivative`, and the `Pose` class: `Pose(matrix)` from a
  4x4 matrix, `Pose.from_axis_angle`, `Pose.from_rotation`, `*`,
  `inverse()`, `adjoint()`, `adjoint_inv()`, and the properties `matrix`,
  `rotation`, `translation`, `axis_angle`, `pose_vector`
  (`[translation, axis-angle]`). Note that `se3.skew_symmetric` fills both
  the rotation block and the translation column from the first three
  components of its 6-vector.
- `lielib.kinematics`: `drdt`, `rotation_correction` (projects onto SO(3)
  as `(C C^T)^(-1/2) C`, raising `numpy.linalg.LinAlgError` on failure),
  `angular_vel_from_rotation`, `angular_vel_from_axis_angle`, `dphi_dt`,
  `compute_twist`, `dt_dt`, `convert_twist_frame`, `p_dot`.
- `lielib.uncertainty`: Gaussian uncertainty on SO(3) and SE(3):
  `bracket_single`, `bracket_double`, `merge_poses_cov` (fourth-order
  covariance of a composed pose), `rotate_vector`, `left_random_r`,
  `update_r_mean`, `update_r_covariance`, `update_t_mean`,
  `update_t_covariance`.
- `lielib.diffdrive`: differential-drive odometry. `load_params` reads
  `wheel_radius` and `track_width` from a JSON file into a
  `DiffDriveParams` (or returns `None` if either key is missing),
  `simulate` integrates a constant body twist on SE(2) and returns the
  visited `(x, y)` positions, start included, and `save_positions` writes
  them as a JSON list of `[x, y]` pairs indented by four spaces.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np
from lielib import so3, se2

R = so3.Rotation(np.array([0.0, 0.0, np.pi / 4]))
print(R.matrix)
print(so3.log_map(R.matrix))

step = se2.Pose.from_twist(np.array([0.628, 0.0, 0.628]) * 0.02)
pose = step * step
print(pose.translation_pair)
```

## Differential-drive demo

```
lielib-diffdrive --params diffdrive_example/diffdrive.json --output diffdrive_example/robot_pos.json
```

The command checks that the parameter file can be opened and parsed
(printing an error and exiting with status 1 otherwise), prints the body
twist `vx: 0.628 vy: 0 vz: 0.628`, drives the robot for 10 seconds in 500
steps along a circle, and writes the 501 positions to the output file. Both
options default to the paths shown above. The wheel geometry is read but
not used in the motion.

## Limitations

- The closed-form formulas are used as they are, with no small-angle
  branches: at a zero rotation angle, functions such as `so3.log_map`,
  `so3.left_jacobian`, `se2.exp_map`, `se2.log_map` and `se3.exp_map`
  return NaN entries instead of a limit value.
- There is no routine for integrating a function along a rotation path.
- The package offers no plotting of the demo's output; it only writes the
  JSON file.