"""Human-readable rendering of a parse run.

The CLI prints ``render_summary`` then ``render_messages`` on stdout.
``render_errors`` is only shown on request (``--show-errors``) and goes to
stderr so the stdout report stays the same with or without it.
"""

from __future__ import annotations

import json

from chatlog.parser import ParseResult


def render_summary(result: ParseResult) -> str:
    """Return the ``Parsed <N> messages`` count line."""
    return f"Parsed {len(result.messages)} messages"


def render_messages(result: ParseResult) -> str:
    """Return every decoded message as an indented JSON array.

    Non-ASCII text is kept as-is.  Lone surrogates (a valid ``\\udXXX`` escape
    in JSON, e.g. an emoji cut in half) cannot be written as UTF-8 and are
    put back as ``\\udXXX`` escapes so the dump still prints.
    """
    dump = json.dumps(result.messages, indent=2, ensure_ascii=False)
    return dump.encode("utf-8", "backslashreplace").decode("utf-8")


def render_errors(result: ParseResult) -> list[str]:
    """Return report lines for every rejected line, header first.

    Returns an empty list when nothing was rejected.
    """
    if not result.errors:
        return []
    lines = [f"Rejected {len(result.errors)} line(s)"]
    width = len(str(result.errors[-1].line))
    for err in result.errors:
        lines.append(f"  line {str(err.line).rjust(width)}: {err.message}")
        lines.append(f"  {''.ljust(width + 5)}  raw: {err.raw}")
    return lines
