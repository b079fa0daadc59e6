"""Shared pytest helpers and fixtures for the chatlog test suite.

write_log(tmp_path, lines)  — write lines to a temp chat log and return its path
message(**overrides)        — a well-formed chat record dict
reset_state                 — autouse: fresh structlog config and settings cache
"""

import json
from pathlib import Path

import pytest
import structlog

from chatlog.config import get_settings

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def message(**overrides) -> dict:
    """Return a chat record with every declared field set."""
    record = {
        "date": "2024-01-01T09:14:03.000Z",
        "sender": "A",
        "body": "hi",
        "quote": "",
        "sticker": "",
        "reactions": [],
        "attachments": [],
    }
    record.update(overrides)
    return record


def message_line(**overrides) -> str:
    return json.dumps(message(**overrides), ensure_ascii=False)


def write_log(tmp_path: Path, lines: list[str], *, newline: str = "\n") -> Path:
    """Write *lines* to ``tmp_path/data.json`` joined by *newline*."""
    p = tmp_path / "data.json"
    p.write_bytes((newline.join(lines) + newline).encode("utf-8"))
    return p


@pytest.fixture(autouse=True)
def reset_state():
    """Isolate each test from structlog state and the settings cache."""
    get_settings.cache_clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
