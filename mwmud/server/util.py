"""String helpers for the dedicated server."""

from __future__ import annotations


def split_string(text: str, delim: str) -> list[str]:
    """Split on a delimiter the way line-reading does: no trailing empty item."""
    parts = text.split(delim)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def equals_ignore_case(s1: str, s2: str) -> bool:
    """Compare two strings character by character, ignoring case."""
    if len(s1) != len(s2):
        return False
    return all(a.upper() == b.upper() for a, b in zip(s1, s2))