"""Whole-file loader for chat logs.

``load_text(path)`` reads the entire file into memory as one string.  Any
failure to read or decode the file is fatal for the run and surfaces as
:class:`FileAccessError`; there is no retry and no fallback path.
"""

from __future__ import annotations

from pathlib import Path

from chatlog.logging import get_logger

_log = get_logger(__name__)


class FileAccessError(OSError):
    """The input chat log is missing, not a regular file, or unreadable."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"cannot read {path}: {detail}")
        self.path = path
        self.detail = detail


def load_text(path: Path, *, encoding: str | None = None) -> str:
    """Return the full text content of *path*.

    Args:
        path:     File to read.
        encoding: Text encoding; ``None`` (or ``""``) uses the platform default.

    Raises:
        FileAccessError: The path does not exist, is a directory, cannot be
                         opened, or is not valid text in *encoding*.
    """
    try:
        # newline="": keep CRLF and lone CR as-is; the parser decides what a break is.
        with path.open(encoding=encoding or None, newline="") as fh:
            text = fh.read()
    except FileNotFoundError as exc:
        raise FileAccessError(path, "no such file") from exc
    except IsADirectoryError as exc:
        raise FileAccessError(path, "is a directory") from exc
    except PermissionError as exc:
        raise FileAccessError(path, "permission denied") from exc
    except UnicodeDecodeError as exc:
        raise FileAccessError(path, f"not valid {exc.encoding} text ({exc.reason})") from exc
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc

    _log.debug("input loaded", path=str(path), chars=len(text))
    return text
