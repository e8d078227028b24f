[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todoscheduler"
version = "1.0.0"
description = "A small task scheduler web service with repeating tasks, SQLite storage and password sign-in"
requires-python = ">=3.10"
keywords = ["todo", "scheduler", "tasks", "planner", "sqlite", "flask", "jwt"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "flask",
    "pyjwt",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
todoscheduler = "todoscheduler.server:main"

[tool.hatch.build.targets.wheel]
packages = ["todoscheduler"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
