"""Text utility functions for password handling."""

from typing import Union


def b_(s: Union[str, bytes]) -> bytes:
    """Convert a password to bytes (UTF-8, no terminator)."""
    if isinstance(s, bytes):
        return s
    return s.encode("utf-8")
