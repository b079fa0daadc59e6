"""Line-by-line chat log parser with per-line error capture.

``parse_chat_text(text)`` splits an already-loaded chat log into lines and
returns a :class:`ParseResult` holding two lists:

- ``messages``: the decoded JSON value of every line that decoded cleanly,
  in line order.  Values are stored as decoded; nothing checks they are
  objects unless ``strict=True``.
- ``errors``:   a :class:`ParseError` for every line that did not decode
  (or, in strict mode, did not match :class:`~chatlog.models.message.ChatMessage`).

Blank lines and lines starting with ``//`` (after trimming) are skipped
silently and appear in neither list.  A bad line never stops the pass.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chatlog.loader import load_text
from chatlog.logging import get_logger
from chatlog.validate import ShapeMismatchError, validate_message

RAW_MAX_CHARS = 200
COMMENT_PREFIX = "//"

# LF or CRLF.  A lone CR is line content, not a break.
_LINE_BREAK = re.compile(r"\r?\n")
# Whitespace plus U+FEFF, so a byte-order mark on line 1 does not cost a record.
_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")

_log = get_logger(__name__)


@dataclass(frozen=True)
class ParseError:
    """A line that could not be turned into a message."""

    line: int
    message: str
    raw: str


@dataclass(frozen=True)
class ParseStats:
    """How every line of the input was classified.

    Attributes:
        total_lines: Lines produced by splitting the input (a trailing
                     newline yields a final empty line).
        blank:       Empty or whitespace-only lines.
        comments:    Lines whose trimmed text starts with the comment prefix.
        parsed:      Lines appended to ``messages``.
        failed:      Lines appended to ``errors``.
    """

    total_lines: int
    blank: int
    comments: int
    parsed: int
    failed: int


@dataclass
class ParseResult:
    """Everything one parse run produced.  Owned by the caller, never shared."""

    messages: list[Any] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    stats: ParseStats = ParseStats(0, 0, 0, 0, 0)


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity by default; chat exports are plain JSON.
    raise ValueError(f"invalid JSON literal {name!r}")


def decode_line(line: str) -> Any:
    """Decode *line* as exactly one strict JSON value.

    Raises:
        ValueError: *line* is not valid JSON (``json.JSONDecodeError`` is a
                    subclass) or uses a non-standard literal such as ``NaN``.
        RecursionError: nesting is too deep to decode.
    """
    return json.loads(line, parse_constant=_reject_constant)


def _describe(exc: Exception) -> str:
    if isinstance(exc, json.JSONDecodeError):
        return f"{exc.msg} (col {exc.colno})"
    if isinstance(exc, RecursionError):
        return "maximum nesting depth exceeded"
    return str(exc)


def parse_chat_text(
    text: str,
    *,
    strict: bool = False,
    raw_max_chars: int = RAW_MAX_CHARS,
    comment_prefix: str = COMMENT_PREFIX,
) -> ParseResult:
    """Classify and decode every line of *text*.

    Args:
        text:           Full chat log content.
        strict:         Also require each decoded value to match the
                        ``ChatMessage`` shape; mismatches become errors.
        raw_max_chars:  Maximum length of ``ParseError.raw``.
        comment_prefix: Trimmed lines starting with this are skipped.

    Returns:
        A :class:`ParseResult`.  Both lists are in line-number order, and
        every non-blank, non-comment line is in exactly one of them.
    """
    result = ParseResult()
    blank = comments = 0

    lines = _LINE_BREAK.split(text)
    for line_number, raw in enumerate(lines, start=1):
        line = _EDGE_SPACE.sub("", raw)
        if not line:
            blank += 1
            continue
        if line.startswith(comment_prefix):
            comments += 1
            continue

        try:
            value = decode_line(line)
        except (ValueError, RecursionError) as exc:
            _reject(result, line_number, _describe(exc), raw, raw_max_chars)
            continue

        if strict:
            try:
                validate_message(value)
            except ShapeMismatchError as exc:
                _reject(result, line_number, f"shape mismatch: {exc}", raw, raw_max_chars)
                continue

        result.messages.append(value)

    result.stats = ParseStats(
        total_lines=len(lines),
        blank=blank,
        comments=comments,
        parsed=len(result.messages),
        failed=len(result.errors),
    )
    _log.info(
        "parse complete",
        lines=len(lines),
        parsed=result.stats.parsed,
        failed=result.stats.failed,
        skipped=blank + comments,
    )
    return result


def _reject(result: ParseResult, line_number: int, message: str, raw: str, limit: int) -> None:
    # limit counts code points; an emoji is one character, not two.
    result.errors.append(ParseError(line=line_number, message=message, raw=raw[:limit]))
    _log.debug("line rejected", line=line_number, reason=message)


def parse_chat_file(
    path: Path,
    *,
    encoding: str | None = None,
    strict: bool = False,
    raw_max_chars: int = RAW_MAX_CHARS,
    comment_prefix: str = COMMENT_PREFIX,
) -> ParseResult:
    """Load *path* and parse it.  See :func:`parse_chat_text`.

    Raises:
        FileAccessError: *path* cannot be read; nothing is parsed.
    """
    text = load_text(path, encoding=encoding)
    return parse_chat_text(
        text,
        strict=strict,
        raw_max_chars=raw_max_chars,
        comment_prefix=comment_prefix,
    )
