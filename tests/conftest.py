import io

import pytest


class TTYInput(io.StringIO):
    """StringIO that claims to be a terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def tty_input():
    return TTYInput


@pytest.fixture
def write_env(tmp_path):
    def _write(text: str, name: str = ".env"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8", newline="")
        return path

    return _write
