[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskkit"
version = "0.1.0"
description = "Small building blocks for background work: a threaded logger, timers, a msgpack codec and name-based call routers."
requires-python = ">=3.10"
keywords = ["timer", "scheduler", "logger", "msgpack", "rpc", "router", "md5"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "msgpack",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
taskkit-logger = "taskkit.logger:main"
taskkit-timers = "taskkit.timers:main"

[tool.hatch.build.targets.wheel]
packages = ["taskkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
