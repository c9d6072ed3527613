"""
Single-pass `${NAME}` substitution against a variable store.

Substituted text is copied as-is and never scanned again, so `${A}` whose
value is `${B}` expands to the literal `${B}`.
"""

from __future__ import annotations

from typing import List

from .errors import ExpansionOverflowError
from .store import VariableStore

OPEN = "${"
CLOSE = "}"

# Upper bound on an expanded value, in characters.
MAX_EXPANDED_LENGTH = 1 << 20


def expand_vars(value: str, store: VariableStore) -> str:
    parts: List[str] = []
    size = 0
    pos = 0
    end = len(value)
    while pos < end:
        start = value.find(OPEN, pos)
        if start < 0:
            chunk = value[pos:]
            pos = end
        else:
            close = value.find(CLOSE, start + len(OPEN))
            if close < 0:
                # Unterminated reference: the rest is literal text.
                chunk = value[pos:]
                pos = end
            else:
                name = value[start + len(OPEN):close]
                chunk = value[pos:start] + (store.get(name) or "")
                pos = close + 1
        size += len(chunk)
        if size > MAX_EXPANDED_LENGTH:
            raise ExpansionOverflowError(MAX_EXPANDED_LENGTH)
        parts.append(chunk)
    return "".join(parts)
