"""
.env loader: reads KEY=VALUE lines and installs them into a variable store.

Each line is trimmed, comments and blank lines are skipped, an optional
`export ` prefix is dropped, the value is parsed (quotes, escapes, inline
comments) and `${NAME}` references are expanded against the store as it is at
that point in the file. Later assignments overwrite earlier ones.

When nothing was set and stdin is a terminal, the user is offered to type the
missing entries; they are appended to the file and installed as well.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TextIO, Tuple

from .collector import collect_entries
from .errors import (
    STATUS_OK,
    ExpansionOverflowError,
    InteractiveIOError,
    LoadError,
    MalformedLineError,
    StoreSetError,
)
from .expander import expand_vars
from .logging_utils import NDJSONLogger, emit
from .store import VariableStore, default_store
from .text_utils import strip_line_ending, trim
from .value_parser import parse_value

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"
EXPORT_PREFIX = "export "
COMMENT_PREFIX = "#"
MISSING_EQUALS = "missing '='"
EMPTY_KEY = "empty key"


@dataclass(slots=True)
class ConfigLine:
    text: str
    lineno: int


@dataclass(slots=True)
class ParsedEntry:
    key: str
    value: str
    lineno: int


def iter_config_lines(lines: Iterable[str]) -> Iterator[ConfigLine]:
    for lineno, text in enumerate(lines, start=1):
        yield ConfigLine(text=text, lineno=lineno)


def split_assignment(line: ConfigLine) -> Optional[Tuple[str, str]]:
    """
    Return (key, raw value) for an assignment line, None for blank and comment
    lines. Lines without `=` or with an empty key raise MalformedLineError.
    """
    text = trim(line.text)
    if not text or text.startswith(COMMENT_PREFIX):
        return None
    if text.startswith(EXPORT_PREFIX):
        text = text[len(EXPORT_PREFIX):]
    key, sep, raw_value = text.partition("=")
    if not sep:
        raise MalformedLineError(line.lineno, MISSING_EQUALS)
    key = trim(key)
    if not key:
        raise MalformedLineError(line.lineno, EMPTY_KEY)
    return key, strip_line_ending(raw_value)


def parse_line(line: ConfigLine, store: VariableStore, path: str = DEFAULT_ENV_FILE) -> Optional[ParsedEntry]:
    """Run one line through parse and expand; None when the line holds no assignment."""
    assignment = split_assignment(line)
    if assignment is None:
        return None
    key, raw_value = assignment
    try:
        parsed = parse_value(raw_value)
    except MemoryError as exc:
        raise LoadError("parse", path, line.lineno, "out of memory") from exc
    try:
        value = expand_vars(parsed, store)
    except MemoryError as exc:
        raise LoadError("expand", path, line.lineno, "out of memory") from exc
    except ExpansionOverflowError as exc:
        raise LoadError("expand", path, line.lineno, str(exc)) from exc
    return ParsedEntry(key=key, value=value, lineno=line.lineno)


def _install_lines(
    lines: Iterable[str],
    store: VariableStore,
    path: str,
    audit: Optional[NDJSONLogger],
) -> int:
    vars_set = 0
    for line in iter_config_lines(lines):
        try:
            entry = parse_line(line, store, path)
        except MalformedLineError as exc:
            level = logging.WARNING if exc.reason == EMPTY_KEY else logging.DEBUG
            logger.log(level, "%s: skipping line %d (%s)", path, exc.lineno, exc.reason)
            emit(audit, "line_skipped", line=exc.lineno, reason=exc.reason)
            continue
        if entry is None:
            continue
        try:
            store.set(entry.key, entry.value)
        except StoreSetError as exc:
            logger.warning("failed to set env %s (line %d): %s", entry.key, entry.lineno, exc.reason)
            emit(audit, "set_failed", key=entry.key, line=entry.lineno)
            continue
        vars_set += 1
        emit(audit, "entry_set", key=entry.key, line=entry.lineno)
    return vars_set


def _read_env_file(
    env_path: pathlib.Path,
    store: VariableStore,
    audit: Optional[NDJSONLogger],
) -> Tuple[int, bool]:
    """Install the file's entries; returns (count, file_missing)."""
    try:
        handle = env_path.open("r", encoding="utf-8", errors="replace", newline="\n")
    except FileNotFoundError:
        logger.info("no env file at %s", env_path)
        return 0, True
    except OSError as exc:
        logger.warning("cannot read env file %s: %s", env_path, exc)
        return 0, True
    with handle:
        return _install_lines(handle, store, str(env_path), audit), False


def _ask_yes_no(question: str, stdin: TextIO, stdout: TextIO) -> bool:
    stdout.write(question)
    stdout.flush()
    answer = stdin.readline()
    return answer[:1] in ("y", "Y")


def _offer_interactive(
    env_path: pathlib.Path,
    store: VariableStore,
    file_missing: bool,
    stdin: TextIO,
    stdout: TextIO,
    audit: Optional[NDJSONLogger],
) -> Optional[int]:
    if file_missing:
        print(f"No .env file found at '{env_path}'.", file=stdout)
    else:
        print(f"No environment variables were set from '{env_path}'.", file=stdout)
    question = f"Would you like to create/append entries to '{env_path}' now? (y/N): "
    if not _ask_yes_no(question, stdin, stdout):
        return None
    try:
        added = collect_entries(env_path, store, stdin=stdin, stdout=stdout, audit=audit)
    except InteractiveIOError as exc:
        raise LoadError("append", str(env_path), detail=str(exc)) from exc
    if added == 0:
        print("No entries added.", file=stdout)
    else:
        print(f"Added {added} env entries to {env_path} and set them in the process.", file=stdout)
    return added


def load_dotenv(
    path: str | pathlib.Path = DEFAULT_ENV_FILE,
    store: Optional[VariableStore] = None,
    *,
    interactive: bool = True,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    audit: Optional[NDJSONLogger] = None,
) -> int:
    """
    Load `path` into `store` and return the number of entries set.

    A missing file is not an error. Raises LoadError when parsing or expansion
    runs out of memory, or when interactively typed entries cannot be written.
    Entries set before a failure stay set.
    """
    store = store if store is not None else default_store()
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    env_path = pathlib.Path(path)

    emit(audit, "load_started", path=str(env_path))
    vars_set, file_missing = _read_env_file(env_path, store, audit)
    logger.info("set %d entries from %s", vars_set, env_path)

    if vars_set == 0 and interactive and _is_tty(stdin):
        added = _offer_interactive(env_path, store, file_missing, stdin, stdout, audit)
        if added is not None:
            vars_set = added

    emit(audit, "load_finished", path=str(env_path), entries_set=vars_set)
    return vars_set


def load_dotenv_status(
    path: str | pathlib.Path = DEFAULT_ENV_FILE,
    store: Optional[VariableStore] = None,
    **kwargs,
) -> int:
    """Status-code wrapper around load_dotenv: 0 on success, negative per failing phase."""
    try:
        load_dotenv(path, store, **kwargs)
    except LoadError as exc:
        if exc.phase == "append":
            print(f"Error: failed to write to {exc.path}", file=sys.stderr)
        else:
            print(f"Error: {exc}", file=sys.stderr)
        return exc.status
    return STATUS_OK


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
