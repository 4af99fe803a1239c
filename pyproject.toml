[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ncmkit"
version = "0.1.0"
description = "Cron schedules, an HTTP alert sender and option, key and payload helpers for daily music-service tasks"
requires-python = ">=3.10"
dependencies = []
keywords = ["cron", "crontab", "scheduling", "alerts", "webhook", "scrobble", "music"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ncmkit"]

[tool.hatch.build.targets.sdist]
include = ["ncmkit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
