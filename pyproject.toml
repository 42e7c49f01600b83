[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "menushell"
version = "0.1.0"
description = "Build interactive, menu-driven command shells with typed commands, submenus, history and completion."
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "shell", "repl", "menu", "command-line", "interactive", "completion", "history"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
menushell-demo = "menushell.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["menushell"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
