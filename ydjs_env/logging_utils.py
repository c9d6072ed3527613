"""
Audit trail for env loading, written as an NDJSON event stream.

Only keys, line numbers and counts are recorded; values may hold secrets and
never reach the log.
"""

from __future__ import annotations

import json
import pathlib
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class NDJSONLogger:
    """
    Writes JSON records to a file, one per line.

    Each record gets an ISO timestamp; keys are sorted so the output diffs
    cleanly between runs. Records are flushed as they are written.
    """

    def __init__(self, path: pathlib.Path, append: bool = True) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a" if append else "w", encoding="utf-8")

    def log(self, event_type: str, payload: Optional[Dict[str, Any]] = None) -> None:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "type": event_type,
            "payload": payload or {},
        }
        self._file.write(json.dumps(record, sort_keys=True) + "\n")
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> "NDJSONLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def emit(audit: Optional[NDJSONLogger], event_type: str, **payload: Any) -> None:
    if audit is not None:
        audit.log(event_type, payload)
