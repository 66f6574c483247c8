[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyredis"
version = "0.1.0"
description = "Redis-style building blocks: RESP replies, a streaming parser, a sharded dictionary, key locks and a TCP line echo server"
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "resp", "tcp", "server", "protocol", "parser", "key-value"]
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
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinyredis = "tinyredis.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyredis"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
