[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubeserver"
version = "0.0.1"
description = "Building blocks for a block-game server: wire buffers, packets, NBT, chat formatting, chunk storage, encryption and task scheduling"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "game-server",
    "protocol",
    "nbt",
    "varint",
    "chunks",
    "cfb8",
]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cubeserver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
