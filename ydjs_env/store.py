"""
Variable stores the loader installs into and the splitter reads from.

`EnvironStore` is the process-wide store backed by `os.environ`. `MemoryStore`
keeps values in a plain dict so tests and embedding code can run without
touching the real environment.
"""

from __future__ import annotations

import os
from typing import Dict, Iterator, MutableMapping, Optional, Protocol

from .errors import StoreSetError


class VariableStore(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...


def validate_assignment(name: str, value: str) -> None:
    """
    Reject assignments the operating system would refuse.

    Raises StoreSetError so both stores fail on the same inputs.
    """
    if not name:
        raise StoreSetError(name, "empty name")
    if "=" in name:
        raise StoreSetError(name, "name contains '='")
    if "\0" in name or "\0" in value:
        raise StoreSetError(name, "embedded null character")


class EnvironStore:
    """Process environment; later sets overwrite earlier ones."""

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(name)

    def set(self, name: str, value: str) -> None:
        validate_assignment(name, value)
        try:
            self._environ[name] = value
        except (OSError, ValueError) as exc:
            raise StoreSetError(name, str(exc)) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._environ


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        validate_assignment(name, value)
        self._values[name] = value

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


_default_store: Optional[VariableStore] = None


def default_store() -> VariableStore:
    """Return the shared process-wide store, creating it on first use."""
    global _default_store
    if _default_store is None:
        _default_store = EnvironStore()
    return _default_store
