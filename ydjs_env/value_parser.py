"""
Turns the raw text right of `=` into the literal value.

Quoted values (`"..."` or `'...'`) keep `#` and take a backslash as "use the
next character literally". Unquoted values end at the first `#` and are
trimmed. Nothing here raises: malformed input yields an empty or truncated
string.
"""

from __future__ import annotations

from typing import List

from .text_utils import ltrim, trim

QUOTES = ("\"", "'")
COMMENT_CHAR = "#"
ESCAPE_CHAR = "\\"

# Longest value the parser produces; longer input is cut at this length.
MAX_VALUE_LENGTH = 4095


def parse_value(raw: str) -> str:
    text = ltrim(raw)
    if not text:
        return ""
    if text[0] in QUOTES:
        return _parse_quoted(text[1:], text[0])
    return _parse_unquoted(text)


def _parse_quoted(body: str, quote: str) -> str:
    out: List[str] = []
    idx = 0
    end = len(body)
    while idx < end and len(out) < MAX_VALUE_LENGTH:
        char = body[idx]
        if char == quote:
            break
        if char == ESCAPE_CHAR and idx + 1 < end:
            out.append(body[idx + 1])
            idx += 2
            continue
        out.append(char)
        idx += 1
    return "".join(out)


def _parse_unquoted(text: str) -> str:
    cut = text.find(COMMENT_CHAR)
    span = text if cut < 0 else text[:cut]
    return trim(span[:MAX_VALUE_LENGTH])
