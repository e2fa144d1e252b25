"""Bracket alphabet and character classification helpers."""

from __future__ import annotations

from typing import Dict, Optional

OPENING_TO_CLOSING: Dict[str, str] = {"(": ")", "[": "]", "{": "}"}
BRACKETS = frozenset(OPENING_TO_CLOSING) | frozenset(OPENING_TO_CLOSING.values())


def is_bracket(char: str) -> bool:
    """Return ``True`` when *char* is one of ``()[]{}``."""

    return char in BRACKETS


def opening_to_closing(char: str) -> Optional[str]:
    """Return the closer paired with the opening bracket *char*, else ``None``."""

    return OPENING_TO_CLOSING.get(char)


def is_single_byte(char: str) -> bool:
    """Return ``True`` when *char* encodes to a single byte.

    Only ASCII code points fit into one UTF-8 byte, which also keeps them to a
    single UTF-16 code unit.
    """

    return ord(char) < 0x80


__all__ = [
    "BRACKETS",
    "OPENING_TO_CLOSING",
    "is_bracket",
    "is_single_byte",
    "opening_to_closing",
]
