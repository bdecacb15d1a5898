[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsoncoerce"
version = "0.1.0"
description = "Value types that coerce loosely typed JSON and database values: compact dates, passphrase-encrypted fields and numeric strings."
requires-python = ">=3.10"
keywords = ["json", "coercion", "decryptbypassphrase", "sql", "dates", "serialization"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["jsoncoerce"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
