from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

# Ensure "src" is on sys.path for imports in tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


class Session:
    """Scripted stdin plus captured stdout for driving a tree in tests."""

    def __init__(self, lines: list[str]):
        self.input = io.StringIO("".join(f"{line}\n" for line in lines))
        self.output = io.StringIO()

    @property
    def text(self) -> str:
        return self.output.getvalue()

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


@pytest.fixture
def session():
    return Session
