"""A small multi-user dungeon: chat server, client core and campaign editor tools."""

__version__ = "0.1.0"