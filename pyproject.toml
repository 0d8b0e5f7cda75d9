[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "embedkit"
version = "0.1.0"
description = "QR code encoding and generic array and list algorithms in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "qr-code",
    "reed-solomon",
    "linked-list",
    "hash-table",
    "quicksort",
    "heapsort",
    "priority-queue",
]
classifiers = [
    "Development Status :: 4 - Beta",
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

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["embedkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
