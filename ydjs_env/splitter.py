"""
Splits a stored value into trimmed tokens.

Example: `"  a ,  b,c  "` split on `","` gives `["a", "b", "c"]`; a value with
no delimiter in it, such as `"Jaehoon Song"` split on `";"`, gives a single
token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .store import VariableStore, default_store
from .text_utils import trim


@dataclass(slots=True)
class SplitResult:
    tokens: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.tokens)

    def release(self) -> None:
        self.tokens.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]


def split_value(value: str, delim: Optional[str]) -> List[str]:
    """
    Partition on every character of `delim`, trim each part and drop the empty
    ones. An empty or missing `delim` keeps the whole trimmed value, even when
    that trims down to an empty string.
    """
    if not delim:
        return [trim(value)]
    pattern = "[" + re.escape(delim) + "]"
    tokens = (trim(part) for part in re.split(pattern, value))
    return [token for token in tokens if token]


def get_env(
    name: str,
    delim: Optional[str] = None,
    store: Optional[VariableStore] = None,
) -> Optional[SplitResult]:
    """Return the tokens of `name`, or None when it is unset, empty or all delimiters."""
    store = store if store is not None else default_store()
    raw = store.get(name)
    if not raw:
        return None
    tokens = split_value(raw, delim)
    if not tokens:
        return None
    return SplitResult(tokens)


def free_env(result: Optional[SplitResult]) -> None:
    if result is not None:
        result.release()
