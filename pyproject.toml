[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lielib"
version = "1.0.0"
description = "Lie group tools for robotics: SO(2), SO(3), SE(2), SE(3), kinematics and uncertainty propagation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "lie group",
    "lie algebra",
    "robotics",
    "SO3",
    "SE3",
    "kinematics",
    "state estimation",
    "odometry",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[project.scripts]
lielib-diffdrive = "lielib.diffdrive:main"

[tool.hatch.build.targets.wheel]
packages = ["lielib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
