[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "catalogresolver"
version = "0.1.0"
description = "Catalog data model, API sets, resolver constraints and variables for operator package catalogs"
requires-python = ">=3.10"
dependencies = []
keywords = ["operators", "catalog", "resolver", "constraints", "packages"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["catalogresolver"]

[tool.pytest.ini_options]
addopts = "-ra"
