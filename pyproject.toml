[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "turtlekit"
version = "0.1.0"
description = "Motion control, sensor processing and fusion helpers for a small differential-drive robot"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robotics",
    "odometry",
    "imu",
    "laser-scan",
    "sensor-fusion",
    "waypoints",
    "teleoperation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
turtlekit-area = "turtlekit.polygons:main"

[tool.hatch.build.targets.wheel]
packages = ["turtlekit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
