[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexelra"
version = "0.1.0"
description = "Identity module state, genesis handling, testnet helpers and snapshot tooling for the Nexelra chain"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "identity", "genesis", "snapshots", "bech32", "testnet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nexelrad = "nexelra.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nexelra"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
