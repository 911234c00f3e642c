[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "homealarm"
version = "0.1.0"
description = "Smart home fire alarm on simulated hardware: gas and temperature detection, siren, strobe light, keypad code entry, character display, serial console and event log"
requires-python = ">=3.10"
dependencies = []
keywords = ["home automation", "fire alarm", "simulation", "keypad", "lcd", "event log"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
homealarm = "homealarm.smart_home_system:main"

[tool.setuptools.packages.find]
include = ["homealarm*"]

[tool.pytest.ini_options]
addopts = "-ra"
