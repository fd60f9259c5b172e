"""Lie group tools for robotics: SO(2), SO(3), SE(2), SE(3), kinematics, uncertainty and odometry."""

__version__ = "1.0.0"

__all__ = ["so2", "so3", "se2", "se3", "kinematics", "uncertainty", "diffdrive"]