[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "capataz"
version = "0.1.0"
description = "Supervision tree building blocks for asyncio: contexts, node errors and supervision events"
requires-python = ">=3.10"
dependencies = []
keywords = ["supervision", "supervisor", "asyncio", "otp", "fault-tolerance", "events"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["capataz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
