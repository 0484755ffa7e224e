"""Command line interface: ``unixhuman [PATHS]...``.

Reads the named files (or standard input) as one stream and writes it to
standard output with UNIX timestamps replaced by readable times.
"""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack
from enum import Enum
from typing import List, Optional

import typer

from unixhuman import __version__
from unixhuman.config import DEFAULT_FORMAT, FilterConfig, parse_interval, parse_time
from unixhuman.errors import ConfigError, StreamError
from unixhuman.pipeline import run
from unixhuman.streams import STDIN_PATH, OutputSink, open_inputs
from unixhuman.utils.logger import get_logger

__all__ = ["app", "main"]

logger = get_logger(__name__)

RANGE_GROUP = "Exact time span (defaults to --relative-interval around now)"

app = typer.Typer(
    help="Replace UNIX timestamps in text with human readable times.",
    add_completion=False,
)


class OutputMode(str, Enum):
    absolute = "absolute"
    relative = "relative"
    absolute_relative = "absolute+relative"


class PredefinedFormat(str, Enum):
    rfc3339 = "RFC3339"
    rfc3339_nano = "RFC3339Nano"
    custom = "custom"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"unixhuman {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("unixhuman").setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_config(
    *,
    milliseconds: bool,
    from_time: Optional[str],
    to_time: Optional[str],
    relative_interval: str,
    output_mode: str,
    predefined_format: str,
    format: str,
    timezone: Optional[str],
    unbuffered: bool,
) -> FilterConfig:
    """Turn raw option values into a FilterConfig.

    Raises:
        ConfigError: If any value is invalid
    """
    return FilterConfig(
        milliseconds=milliseconds,
        from_time=parse_time(from_time) if from_time else None,
        to_time=parse_time(to_time) if to_time else None,
        relative_interval=parse_interval(relative_interval),
        output_mode=output_mode,
        predefined_format=predefined_format,
        format=format,
        timezone=timezone,
        unbuffered=unbuffered,
    )


@app.command()
def main(
    paths: Optional[List[str]] = typer.Argument(
        None, metavar="[PATH]...", help="Files to read; '-' is standard input (default)."
    ),
    milliseconds: bool = typer.Option(
        False,
        "--milliseconds",
        help="Search for UNIX timestamps in millisecond resolution instead of seconds. "
        "Decimal points are not supported.",
    ),
    from_time: Optional[str] = typer.Option(
        None, "--from", help="The earliest UNIX timestamp matched. RFC3339.", rich_help_panel=RANGE_GROUP
    ),
    to_time: Optional[str] = typer.Option(
        None, "--to", help="The latest UNIX timestamp matched. RFC3339.", rich_help_panel=RANGE_GROUP
    ),
    relative_interval: str = typer.Option(
        "87600h",
        "--relative-interval",
        help="Interval +/- around the current time in which timestamps are matched "
        "(e.g. 87600h, 1h30m, P1Y).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging to stderr."),
    output_mode: OutputMode = typer.Option(
        OutputMode.absolute, "--output-mode", help="Whether the time should be absolute, relative, or both."
    ),
    predefined_format: PredefinedFormat = typer.Option(
        PredefinedFormat.rfc3339, "--predefined-format", "-p", help="Predefined time format for replacements."
    ),
    custom_format: str = typer.Option(
        DEFAULT_FORMAT, "--format", help="pendulum format string used with --predefined-format custom."
    ),
    timezone: Optional[str] = typer.Option(
        None, "--timezone", help="Timezone for rendered times (defaults to the local timezone)."
    ),
    unbuffered: bool = typer.Option(False, "--unbuffered", help="Flush output after every write."),
    version: bool = typer.Option(
        False, "--version", help="Show unixhuman version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """Replace UNIX timestamps with human interpretable timestamps."""
    _configure_logging(verbose)

    try:
        config = build_config(
            milliseconds=milliseconds,
            from_time=from_time,
            to_time=to_time,
            relative_interval=relative_interval,
            output_mode=output_mode.value,
            predefined_format=predefined_format.value,
            format=custom_format,
            timezone=timezone,
            unbuffered=unbuffered,
        )
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    with ExitStack() as stack:
        try:
            paths = paths or [STDIN_PATH]
            logger.debug("reading %s", ", ".join(paths))
            reader = open_inputs(paths, stack)
            run(reader, OutputSink(sys.stdout.buffer, unbuffered=config.unbuffered), config)
        except ConfigError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=2) from exc
        except StreamError as exc:
            logger.error("aborting: %s", exc)
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc


if __name__ == "__main__":  # pragma: no cover
    app()
