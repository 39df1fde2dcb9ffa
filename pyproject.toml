[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hexegg"
version = "0.1.0"
description = "Core of a hex viewer and editor: patchable file buffers, searching, string extraction, entropy, histograms, file signature detection and configuration loading."
requires-python = ">=3.12"
dependencies = []
keywords = [
    "hex",
    "hexdump",
    "hex-editor",
    "binary",
    "reverse-engineering",
    "file-signatures",
    "entropy",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hexegg"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py312"

[tool.mypy]
python_version = "3.12"
warn_unused_ignores = true
