[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qbotkit"
version = "0.1.0"
description = "Game logic for group chat bots: daily marriages, sign-in levels, tarot, sleep tracking, reincarnation rolls and wife galleries"
requires-python = ">=3.10"
dependencies = []
keywords = ["chatbot", "group-chat", "tarot", "sign-in", "games"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qbotkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
