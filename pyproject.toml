[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "insta360ctl"
version = "0.1.0"
description = "Wire protocols for controlling Insta360 cameras over BLE and WiFi"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "insta360",
    "camera",
    "ble",
    "bluetooth",
    "wifi",
    "protocol",
    "crc16",
    "live-stream",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Capture :: Digital Camera",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["insta360ctl"]

[tool.hatch.build.targets.sdist]
include = ["insta360ctl", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
