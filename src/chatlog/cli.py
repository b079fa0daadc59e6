"""CLI root — entry point for all chatlog subcommands.

Entry points:
  chatlog               parse the configured input (same as ``chatlog parse``)
  python -m chatlog

Command surface:
  chatlog parse [PATH]  decode a chat log and print the recovered messages
  chatlog config show   print resolved configuration
"""

from pathlib import Path

import typer

from chatlog import __version__
from chatlog.logging import get_logger

app = typer.Typer(
    name="chatlog",
    help="Read a newline-delimited JSON chat log and print its messages.",
    invoke_without_command=True,
)

_log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Global callback: runs before every subcommand
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"chatlog {__version__}")
        raise typer.Exit()


@app.callback()
def _main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log at DEBUG, including every rejected line.",
    ),
    log_format: str = typer.Option(
        "",
        "--log-format",
        help="Log format on stderr: json or text.  Empty = from configuration.",
        show_default=False,
    ),
) -> None:
    """Read a newline-delimited JSON chat log and print its messages."""
    # Eager options (--version) raise typer.Exit() before this body runs.
    from chatlog.logging import configure_logging

    if log_format not in ("", "json", "text"):
        raise typer.BadParameter("must be json or text", param_hint="--log-format")
    configure_logging(verbose=verbose, fmt=log_format or None)

    if ctx.invoked_subcommand is None:
        _run_parse(None, strict=False, show_errors=False, fail_on_errors=False)


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


@app.command("parse")
def parse(
    path: Path | None = typer.Argument(
        None,
        help="Chat log to read.  Defaults to input.path from the configuration.",
        show_default=False,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Reject records that do not match the chat message shape.",
    ),
    show_errors: bool = typer.Option(
        False,
        "--show-errors",
        help="List rejected lines on stderr after the report.",
    ),
    fail_on_errors: bool = typer.Option(
        False,
        "--fail-on-errors",
        help="Exit 1 after the report if any line was rejected.",
    ),
) -> None:
    """Decode a chat log line by line and print the recovered messages.

    Blank lines and lines starting with ``//`` are skipped.  Lines that are
    not valid JSON are collected instead of stopping the run; only an
    unreadable input file is fatal.
    """
    _run_parse(path, strict=strict, show_errors=show_errors, fail_on_errors=fail_on_errors)


def _run_parse(
    path: Path | None,
    *,
    strict: bool,
    show_errors: bool,
    fail_on_errors: bool,
) -> None:
    from chatlog.config import get_settings
    from chatlog.loader import FileAccessError
    from chatlog.logging import bind_input
    from chatlog.parser import parse_chat_file
    from chatlog.report import render_errors, render_messages, render_summary

    settings = get_settings()
    source = path if path is not None else settings.input.path
    bind_input(source)

    try:
        result = parse_chat_file(
            source,
            encoding=settings.input.encoding or None,
            strict=strict or settings.parse.strict,
            raw_max_chars=settings.parse.raw_max_chars,
            comment_prefix=settings.parse.comment_prefix,
        )
    except FileAccessError as exc:
        _log.error("input unreadable", detail=exc.detail)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    typer.echo(render_summary(result))
    typer.echo(render_messages(result))

    if result.errors:
        _log.warning("lines rejected", count=len(result.errors))
    if show_errors:
        for line in render_errors(result):
            typer.echo(line, err=True)
    if fail_on_errors and result.errors:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# config subcommands
# ---------------------------------------------------------------------------

_config_app = typer.Typer(help="Inspect resolved configuration.")
app.add_typer(_config_app, name="config")


@_config_app.command("show")
def config_show() -> None:
    """Print the fully-resolved configuration and exit.

    Shows which config file was loaded and the final value of every setting
    after environment-variable overrides are applied.
    """
    from chatlog.config import _config_file, get_settings

    settings = get_settings()

    typer.echo(f"\n  config : {_config_file()}\n")

    for section_name, section in settings.model_dump().items():
        typer.echo(f"  [{section_name}]")
        width = max(len(k) for k in section)
        for key, val in section.items():
            typer.echo(f"  {key.ljust(width)} = {val}")
        typer.echo()
