import io

import pytest

from ydjs_env.collector import INTRO, collect_entries
from ydjs_env.errors import InteractiveIOError
from ydjs_env.store import MemoryStore


def test_appends_raw_lines_and_installs_values(tmp_path):
    path = tmp_path / ".env"
    path.write_text("EXISTING=1\n", encoding="utf-8")
    store = MemoryStore()
    stdin = io.StringIO("  USERNAMES = A;B  \nURLS=https://x\n\n")
    out = io.StringIO()
    added = collect_entries(path, store, stdin=stdin, stdout=out)
    assert added == 2
    assert store.as_dict() == {"USERNAMES": " A;B  ", "URLS": "https://x"}
    assert path.read_text(encoding="utf-8") == "EXISTING=1\n  USERNAMES = A;B  \nURLS=https://x\n"
    assert out.getvalue().startswith(INTRO)


def test_invalid_lines_are_rejected_and_reprompted(tmp_path):
    path = tmp_path / ".env"
    out = io.StringIO()
    store = MemoryStore()
    added = collect_entries(path, store, stdin=io.StringIO("no equals\n=value\n   = value\nOK=yes\n"), stdout=out)
    assert added == 1
    assert store.as_dict() == {"OK": "yes"}
    assert path.read_text(encoding="utf-8") == "OK=yes\n"
    text = out.getvalue()
    assert "Invalid format (missing '='). Use KEY=VALUE." in text
    assert text.count("Key is empty.") == 2
    assert text.count("> ") == 5


def test_end_of_input_finishes(tmp_path):
    path = tmp_path / ".env"
    assert collect_entries(path, MemoryStore(), stdin=io.StringIO(""), stdout=io.StringIO()) == 0
    assert path.exists()
    assert path.read_text(encoding="utf-8") == ""


def test_value_is_not_parsed(tmp_path):
    store = MemoryStore()
    collect_entries(tmp_path / ".env", store, stdin=io.StringIO("A=x # y\n"), stdout=io.StringIO())
    assert store.get("A") == "x # y"


def test_store_failure_is_appended_but_not_counted(tmp_path, caplog):
    path = tmp_path / ".env"
    store = MemoryStore()
    with caplog.at_level("WARNING"):
        added = collect_entries(path, store, stdin=io.StringIO("BAD=a\0b\nGOOD=1\n"), stdout=io.StringIO())
    assert added == 1
    assert store.as_dict() == {"GOOD": "1"}
    assert path.read_text(encoding="utf-8") == "BAD=a\0b\nGOOD=1\n"
    assert "failed to set BAD" in caplog.text


def test_open_failure_raises(tmp_path):
    with pytest.raises(InteractiveIOError):
        collect_entries(tmp_path, MemoryStore(), stdin=io.StringIO("A=1\n"), stdout=io.StringIO())
