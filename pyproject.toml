[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zkaleido"
version = "0.1.0"
description = "A pluggable toolkit for building, running and measuring zero-knowledge VM programs."
requires-python = ">=3.10"
keywords = ["zero-knowledge", "zkvm", "proofs", "bincode", "borsh", "schnorr", "benchmark"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[project.scripts]
zkaleido-runner = "zkaleido.runner.main:main"

[tool.hatch.build.targets.wheel]
packages = ["zkaleido"]

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
