"""
Command-line interface for the base reporter.

This module provides a subcommand-based CLI using Typer.
"""

import sys
from functools import partial
from pathlib import Path
from typing import Optional

import typer

from base_reporter.core.config import ReporterConfig
from base_reporter.core.errors import ConfigurationError, EventReplayError
from base_reporter.core.logging import setup_logger
from base_reporter.reporting.colors import ColorFormatter
from base_reporter.reporting.diff import DiffRenderer
from base_reporter.reporting.events import EventEmitter
from base_reporter.reporting.replay import load_events, replay as replay_events
from base_reporter.reporting.reporter import Reporter, VerboseReporter

app = typer.Typer(
    name="base-reporter",
    help="Render test runner event streams and assertion diffs as console reports",
    add_completion=False,
)


def get_config(
    colors: Optional[bool] = None,
    inline_diffs: Optional[bool] = None,
    verbosity: Optional[int] = None,
    config_file: Optional[Path] = None,
) -> ReporterConfig:
    """Create ReporterConfig, exiting with a message on bad configuration."""
    try:
        return ReporterConfig(
            use_colors=colors,
            inline_diffs=inline_diffs,
            verbosity=verbosity,
            config_file=config_file,
        )
    except (ConfigurationError, ValueError) as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(2)


@app.command()
def replay(
    events_file: Path = typer.Argument(..., help="YAML/JSON list of runner events"),
    inline_diffs: Optional[bool] = typer.Option(None, "--inline-diffs/--unified-diffs", help="Diff layout for failures"),
    colors: Optional[bool] = typer.Option(None, "--colors/--no-colors", help="Force colors on or off (default: detect)"),
    verbose_passes: bool = typer.Option(False, "--passes", help="List passing tests as well"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="TOML file with [base_reporter] settings"),
):
    """Replay recorded runner events through the reporter."""
    config = get_config(colors=colors, inline_diffs=inline_diffs, verbosity=verbosity, config_file=config_file)
    logger = setup_logger(verbosity=config.verbosity)

    try:
        event_list = load_events(events_file)
    except EventReplayError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(2)
    logger.info(f"Replaying {len(event_list)} events from {events_file}")

    emitter = EventEmitter()
    reporter_cls = VerboseReporter if verbose_passes else Reporter
    # Color decisions are made by the formatter; keep escapes as written
    reporter = reporter_cls(emitter, config=config, sink=partial(typer.echo, color=True))
    replay_events(event_list, emitter)

    if reporter.get_buffer():
        logger.warning("Event script has no 'end' event; flushing partial report")
        reporter.print()

    sys.exit(1 if reporter.stats.failures else 0)


@app.command()
def diff(
    actual_file: Path = typer.Argument(..., help="File holding the actual value"),
    expected_file: Path = typer.Argument(..., help="File holding the expected value"),
    inline: Optional[bool] = typer.Option(None, "--inline/--unified", help="Diff layout"),
    colors: Optional[bool] = typer.Option(None, "--colors/--no-colors", help="Force colors on or off (default: detect)"),
    no_escape: bool = typer.Option(False, "--no-escape", help="Show tabs and line endings as-is"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="TOML file with [base_reporter] settings"),
):
    """Print the diff between two text files."""
    config = get_config(colors=colors, inline_diffs=inline, config_file=config_file)
    try:
        actual = actual_file.read_text()
        expected = expected_file.read_text()
    except OSError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(2)

    differ = DiffRenderer(ColorFormatter(enabled=config.use_colors), inline=config.inline_diffs)
    typer.echo(differ.render(actual, expected, escape=not no_escape), color=True)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
