[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amdtune"
version = "0.1.0"
description = "Parse and change AMD GPU overdrive clock/voltage states and read temperatures and fan modulation through sysfs"
requires-python = ">=3.10"
dependencies = []
keywords = ["amdgpu", "gpu", "overclocking", "undervolting", "fan", "temperature", "sysfs", "hwmon"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["amdtune"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
