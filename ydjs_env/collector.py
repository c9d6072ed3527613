"""
Interactive fallback that asks the user for KEY=VALUE lines.

Accepted lines are appended to the env file exactly as typed, so the next load
parses them through the normal pipeline, and installed in the store right away
with the value taken verbatim.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from typing import Optional, TextIO

from .errors import InteractiveIOError, StoreSetError
from .logging_utils import NDJSONLogger, emit
from .store import VariableStore, default_store
from .text_utils import is_blank, strip_line_ending, trim

logger = logging.getLogger(__name__)

INTRO = "Enter KEY=VALUE pairs (one per line). Empty line finishes."
PROMPT = "> "


def collect_entries(
    path: str | pathlib.Path,
    store: Optional[VariableStore] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    audit: Optional[NDJSONLogger] = None,
) -> int:
    """
    Prompt until an empty line or end of input and return how many entries
    were both appended and installed.

    Raises InteractiveIOError when the file cannot be opened or written.
    """
    store = store if store is not None else default_store()
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    path = pathlib.Path(path)

    try:
        handle = path.open("a", encoding="utf-8")
    except OSError as exc:
        raise InteractiveIOError(str(path), exc) from exc

    added = 0
    with handle:
        print(INTRO, file=stdout)
        while True:
            stdout.write(PROMPT)
            stdout.flush()
            raw = stdin.readline()
            if not raw:
                break
            line = strip_line_ending(raw)
            if is_blank(line):
                break

            key, sep, value = line.partition("=")
            if not sep:
                print("Invalid format (missing '='). Use KEY=VALUE.", file=stdout)
                continue
            key = trim(key)
            if not key:
                print("Key is empty.", file=stdout)
                continue

            try:
                handle.write(line + "\n")
                handle.flush()
            except OSError as exc:
                raise InteractiveIOError(str(path), exc) from exc

            try:
                store.set(key, value)
            except StoreSetError as exc:
                logger.warning("failed to set %s in process: %s", key, exc.reason)
                emit(audit, "set_failed", key=key, source="interactive")
                continue
            added += 1
            emit(audit, "interactive_added", key=key)
    return added
