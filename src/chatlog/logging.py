"""structlog setup for chatlog runs.

stdout belongs to the message report, so every log event goes to stderr.
Each run gets a short ``run_id``; once the input is known the CLI binds it
with :func:`bind_input` so every later event says which log it is about:

    run_id = configure_logging(settings, verbose=True)
    bind_input(Path("data.json"))
    get_logger(__name__).info("parse complete", parsed=120, failed=2)
    # stderr: ... [info] parse complete  input=data.json parsed=120 run_id=3f9a0c1e ...

Level and format come from ``[logging]`` in the settings; ``--verbose`` and
``--log-format`` on the command line override them for one run.
"""

import logging as _stdlib
import sys
import uuid
from pathlib import Path
from typing import Literal

import structlog
from structlog.types import Processor

from chatlog.config import Settings, get_settings

LogFormat = Literal["json", "text"]


def _renderer(fmt: LogFormat) -> Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    # Colour only when a person is watching stderr.
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    settings: Settings | None = None,
    *,
    verbose: bool = False,
    fmt: LogFormat | None = None,
) -> str:
    """Configure structlog for one chatlog run and return its run_id.

    Args:
        settings: Resolved settings; ``get_settings()`` when omitted.
        verbose:  Force DEBUG, which also logs every rejected line.
        fmt:      Override ``settings.logging.format``.

    Returns:
        An 8-character hex run_id, bound to every event of this run.
    """
    if settings is None:
        settings = get_settings()

    level = "DEBUG" if verbose else settings.logging.level
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _renderer(fmt or settings.logging.format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(_stdlib, level)),
        context_class=dict,
        # Resolve sys.stderr per run; CliRunner swaps it for each invocation.
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()
    run_id = uuid.uuid4().hex[:8]
    structlog.contextvars.bind_contextvars(run_id=run_id)
    return run_id


def bind_input(path: Path) -> None:
    """Tag every following event of this run with the chat log being read."""
    structlog.contextvars.bind_contextvars(input=str(path))


def get_logger(name: str = "chatlog") -> structlog.BoundLogger:
    return structlog.get_logger(name)
