[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ticketevents"
version = "0.1.0"
description = "HTTP service for managing events and categories, backed by DynamoDB and SQS"
requires-python = ">=3.10"
keywords = ["events", "tickets", "dynamodb", "sqs", "rest", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
ticketevents-server = "ticketevents.app:main"
ticketevents-seed = "ticketevents.seed:main"

[tool.hatch.build.targets.wheel]
packages = ["ticketevents"]

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
