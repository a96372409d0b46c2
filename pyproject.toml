[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixokit"
version = "0.1.0"
description = "Server utilities: environment config, blob storage helpers, localization, chart and workflow clients with log streaming"
requires-python = ">=3.10"
keywords = ["config", "blob-storage", "gcs", "helm", "argo", "kubernetes", "logs", "localization"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pixokit"]

[tool.pytest.ini_options]
addopts = "-ra"
