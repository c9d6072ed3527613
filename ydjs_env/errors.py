"""
Exception hierarchy and status codes for the env loader.

Fatal failures carry the negative status code the `load_dotenv_status` entry
point reports, so callers can tell the failing phase apart.
"""

from __future__ import annotations

from typing import Optional

STATUS_OK = 0
STATUS_PARSE_FAILED = -2
STATUS_EXPAND_FAILED = -3
STATUS_APPEND_FAILED = -4

PHASE_STATUS = {
    "parse": STATUS_PARSE_FAILED,
    "expand": STATUS_EXPAND_FAILED,
    "append": STATUS_APPEND_FAILED,
}


class EnvLoaderError(Exception):
    """Base class for every error raised by this package."""


class StoreSetError(EnvLoaderError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"failed to set {name!r}: {reason}")
        self.name = name
        self.reason = reason


class ExpansionOverflowError(EnvLoaderError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"expanded value exceeds {limit} characters")
        self.limit = limit


class InteractiveIOError(EnvLoaderError):
    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        message = f"failed to write to {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path


class LoadError(EnvLoaderError):
    """
    Fatal failure of a whole load call.

    `phase` is one of "parse", "expand" or "append"; `status` is the matching
    negative code.
    """

    def __init__(self, phase: str, path: str, lineno: Optional[int] = None, detail: str = "") -> None:
        if phase not in PHASE_STATUS:
            raise ValueError(f"unknown load phase {phase!r}")
        where = f"{path}:{lineno}" if lineno is not None else path
        message = f"{phase} failed for {where}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.phase = phase
        self.path = path
        self.lineno = lineno
        self.status = PHASE_STATUS[phase]


class SettingsError(EnvLoaderError):
    pass


class MalformedLineError(EnvLoaderError):
    """A config line that cannot be read as an assignment; never fatal."""

    def __init__(self, lineno: int, reason: str) -> None:
        super().__init__(f"line {lineno}: {reason}")
        self.lineno = lineno
        self.reason = reason
