[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blynkkit"
version = "0.1.0"
description = "Building blocks for Blynk-style IoT devices: parameter buffers, timers, hardware commands, NTP time and a fire monitor"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "blynk",
    "iot",
    "home-automation",
    "sensors",
    "timer",
    "ntp",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blynkkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
