[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mwmud"
version = "0.1.0"
description = "A small multi-user dungeon: a chat server, a client core and campaign editor tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["mud", "multi-user dungeon", "chat", "game server", "text game"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Multi-User Dungeons (MUD)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mwmud-server = "mwmud.server.network:main"

[tool.hatch.build.targets.wheel]
packages = ["mwmud"]

[tool.pytest.ini_options]
addopts = "-ra"
