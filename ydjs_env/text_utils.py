"""
Whitespace helpers shared by the parser, loader and splitter.

Whitespace is the C locale set (space, tab, newline, vertical tab, form feed,
carriage return); non-ASCII spaces are kept as content.
"""

from __future__ import annotations

WHITESPACE = " \t\n\v\f\r"
LINE_ENDINGS = "\r\n"


def trim(text: str) -> str:
    return text.strip(WHITESPACE)


def ltrim(text: str) -> str:
    return text.lstrip(WHITESPACE)


def strip_line_ending(text: str) -> str:
    """Drop any trailing CR/LF characters, leaving other whitespace alone."""
    return text.rstrip(LINE_ENDINGS)


def is_blank(text: str) -> bool:
    return not trim(text)
