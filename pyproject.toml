[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "metalclient"
version = "0.1.0"
description = "Client library for a bare-metal cloud REST API and its instance metadata service"
requires-python = ">=3.10"
dependencies = []
keywords = ["bare-metal", "cloud", "api", "client", "metadata"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["metalclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
