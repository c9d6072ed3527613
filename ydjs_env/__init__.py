"""
ydjs-env: the .env layer of the ydjs git helper.

Key modules:

- value_parser: quote, escape and inline-comment handling for one value.
- expander: single-pass `${NAME}` substitution.
- env_loader: reads a .env file into a variable store.
- collector: interactive prompt for missing entries.
- splitter: turns one stored value into trimmed tokens.
- store: process environment and in-memory variable stores.
- cli: `ydjs-env` command line entry point.
"""

from .env_loader import load_dotenv, load_dotenv_status
from .errors import (
    STATUS_APPEND_FAILED,
    STATUS_EXPAND_FAILED,
    STATUS_OK,
    STATUS_PARSE_FAILED,
    EnvLoaderError,
    LoadError,
)
from .splitter import SplitResult, free_env, get_env
from .store import EnvironStore, MemoryStore, VariableStore

__all__ = [
    "load_dotenv",
    "load_dotenv_status",
    "get_env",
    "free_env",
    "SplitResult",
    "EnvironStore",
    "MemoryStore",
    "VariableStore",
    "EnvLoaderError",
    "LoadError",
    "STATUS_OK",
    "STATUS_PARSE_FAILED",
    "STATUS_EXPAND_FAILED",
    "STATUS_APPEND_FAILED",
]
