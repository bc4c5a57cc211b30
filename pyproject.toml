[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dnsq"
version = "0.1.0"
description = "A small DNS query tool that sends one question and prints the decoded response"
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "query", "edns0", "dnssec", "hexdump"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dnsq = "dnsq.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dnsq"]

[tool.hatch.build.targets.sdist]
include = ["dnsq", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
