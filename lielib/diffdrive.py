"""Odometry of a differential-drive robot driven by a constant body twist."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from lielib import se2

__all__ = ["DiffDriveParams", "load_params", "main", "save_positions", "simulate"]

DEFAULT_BODY_TWIST = (0.628, 0.0, 0.628)
DEFAULT_TOTAL_STEPS = 500
DEFAULT_DURATION = 10.0


@dataclass(frozen=True)
class DiffDriveParams:
    """Geometry of a differential-drive robot."""

    wheel_radius: float
    track_width: float


def load_params(path) -> DiffDriveParams | None:
    """Read the robot geometry from a JSON file.

    Returns None when either key is missing. Raises OSError when the file
    cannot be opened and ValueError when it is not valid JSON.
    """
    with open(path, encoding="utf-8") as handle:
        params = json.load(handle)
    if not isinstance(params, dict):
        return None
    if "wheel_radius" in params and "track_width" in params:
        return DiffDriveParams(float(params["wheel_radius"]), float(params["track_width"]))
    return None


def simulate(
    body_twist=DEFAULT_BODY_TWIST,
    total_steps: int = DEFAULT_TOTAL_STEPS,
    duration: float = DEFAULT_DURATION,
) -> list[tuple[float, float]]:
    """Integrate a constant body twist and return the positions, start included."""
    if total_steps < 1:
        raise ValueError("total_steps must be at least 1")
    twist = np.asarray(body_twist, dtype=float)
    interval = duration / total_steps
    step = se2.Pose(se2.exp_map(twist * interval))

    pose = se2.Pose()
    positions = [pose.translation_pair]
    for _ in range(total_steps):
        pose = pose * step
        positions.append(pose.translation_pair)
    return positions


def save_positions(path, positions) -> None:
    """Write positions as a JSON array of [x, y] pairs, indented by four spaces."""
    data = [[float(x), float(y)] for x, y in positions]
    Path(path).write_text(json.dumps(data, indent=4), encoding="utf-8")


def _format(value: float) -> str:
    return f"{value:g}"


def main(argv=None) -> int:
    """Drive the robot in a circle and save its positions."""
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("--params", default="diffdrive_example/diffdrive.json")
    parser.add_argument("--output", default="diffdrive_example/robot_pos.json")
    args = parser.parse_args(argv)

    try:
        load_params(args.params)
    except OSError:
        print("Failed to open file", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error parsing JSON: {exc}", file=sys.stderr)
        return 1

    vx, vy, w = DEFAULT_BODY_TWIST
    print("body twist components\n:", end="")
    print(f"vx: {_format(vx)} vy: {_format(vy)} vz: {_format(w)}")

    positions = simulate(DEFAULT_BODY_TWIST, DEFAULT_TOTAL_STEPS, DEFAULT_DURATION)
    save_positions(args.output, positions)
    return 0


if __name__ == "__main__":
    sys.exit(main())