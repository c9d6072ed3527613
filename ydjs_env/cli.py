"""Command line interface for loading and inspecting .env files."""

from __future__ import annotations

import argparse
import logging
import os
import pathlib
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config_loader import LoaderSettings, load_settings
from .env_loader import iter_config_lines, load_dotenv, parse_line
from .errors import LoadError, MalformedLineError, SettingsError, StoreSetError
from .logging_utils import NDJSONLogger
from .splitter import get_env
from .store import MemoryStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ydjs-env", description="Load and inspect .env files")
    parser.add_argument("--config", help="Path to a YAML or JSON settings file")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Python logging level (e.g. INFO, WARNING). Overrides the settings file.",
    )
    parser.add_argument("--audit-log", default=None, help="Append NDJSON load events to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    load = sub.add_parser("load", help="Load the env file, prompting for entries if none are found")
    load.add_argument("--file", help="Env file to load (default: .env)")
    load.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt, even when stdin is a terminal",
    )

    get = sub.add_parser("get", help="Print the tokens of one variable, one per line")
    get.add_argument("name", help="Variable name, e.g. USERNAMES")
    get.add_argument("--delim", default=None, help="Delimiter characters (default from settings)")
    get.add_argument("--file", help="Env file to load first (default: .env)")

    check = sub.add_parser("check", help="Parse the env file without installing anything")
    check.add_argument("--file", help="Env file to check (default: .env)")
    return parser


def _resolve_settings(args: argparse.Namespace) -> LoaderSettings:
    settings = load_settings(args.config)
    overrides = {}
    if getattr(args, "file", None):
        overrides["env_file"] = args.file
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.audit_log:
        overrides["audit_log"] = args.audit_log
    if getattr(args, "no_interactive", False):
        overrides["interactive"] = False
    if not overrides:
        return settings
    try:
        return LoaderSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as exc:
        raise SettingsError(f"invalid option: {exc}") from exc


def _cmd_load(settings: LoaderSettings, audit: Optional[NDJSONLogger]) -> int:
    count = load_dotenv(settings.env_file, interactive=settings.interactive, audit=audit)
    print(f"Set {count} entries from {settings.env_file}")
    return 0


def _cmd_get(args: argparse.Namespace, settings: LoaderSettings, audit: Optional[NDJSONLogger]) -> int:
    load_dotenv(settings.env_file, interactive=False, audit=audit)
    delim = settings.default_delimiter if args.delim is None else args.delim
    result = get_env(args.name, delim)
    if result is None:
        print(f"{args.name} not found or empty.", file=sys.stderr)
        return 1
    for token in result:
        print(token)
    return 0


def _cmd_check(settings: LoaderSettings) -> int:
    env_path = pathlib.Path(settings.env_file)
    if not env_path.exists():
        print(f"No .env file found at '{env_path}'.", file=sys.stderr)
        return 1
    # Expand against a copy so checking never changes the real environment.
    store = MemoryStore(dict(os.environ))
    problems = 0
    with env_path.open("r", encoding="utf-8", errors="replace", newline="\n") as handle:
        for line in iter_config_lines(handle):
            try:
                entry = parse_line(line, store, str(env_path))
            except MalformedLineError as exc:
                problems += 1
                print(f"{exc.lineno}: skipped ({exc.reason})")
                continue
            if entry is None:
                continue
            try:
                store.set(entry.key, entry.value)
            except StoreSetError as exc:
                problems += 1
                print(f"{entry.lineno}: {entry.key} rejected ({exc.reason})")
                continue
            print(f"{entry.lineno}: {entry.key}")
    return 1 if problems else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _resolve_settings(args)
    except SettingsError as exc:
        print(f"[ydjs-env] {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))

    try:
        audit = NDJSONLogger(pathlib.Path(settings.audit_log)) if settings.audit_log else None
    except OSError as exc:
        print(f"[ydjs-env] cannot open audit log: {exc}", file=sys.stderr)
        return 2
    try:
        if args.command == "load":
            return _cmd_load(settings, audit)
        if args.command == "get":
            return _cmd_get(args, settings, audit)
        return _cmd_check(settings)
    except LoadError as exc:
        if exc.phase == "append":
            print(f"Error: failed to write to {exc.path}", file=sys.stderr)
        else:
            print(f"Failed to load {settings.env_file}: {exc}", file=sys.stderr)
        return -exc.status
    finally:
        if audit is not None:
            audit.close()


if __name__ == "__main__":
    sys.exit(main())
