"""CLI interface for dirsize."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from dirsize.core.engine import ScanEngine, ScanError
from dirsize.core.report import ReportWriter, build_report, report_to_dict
from dirsize.settings import Settings

log = logging.getLogger(__name__)

_COLOR_MODES = {"always": True, "never": False, "auto": None}


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _resolve_color(mode: str | None, settings: Settings) -> bool | None:
    if mode is None:
        return settings.color
    return _COLOR_MODES[mode]


@click.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--output-file", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the report to this file",
)
@click.option("--workers", "-j", type=click.IntRange(min=1), default=None, help="Maximum number of scan threads")
@click.option(
    "--follow-symlinks/--no-follow-symlinks", "-L",
    default=None,
    help="Follow symbolic links, counting each directory once [default: from settings, else off]",
)
@click.option(
    "--color",
    type=click.Choice(list(_COLOR_MODES)),
    default=None,
    help="Color console output by size unit [default: auto]",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(
    root: Path,
    output_file: Path | None,
    workers: int | None,
    follow_symlinks: bool | None,
    color: str | None,
    as_json: bool,
    verbose: int,
) -> None:
    """Show the size of every subdirectory and file directly under ROOT."""
    _setup_logging(verbose)
    settings = Settings.instance()
    if follow_symlinks is None:
        follow_symlinks = settings.follow_symlinks

    engine = ScanEngine(
        max_workers=workers or settings.max_workers,
        follow_symlinks=follow_symlinks,
    )
    try:
        result = engine.scan(root)
    except ScanError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    try:
        if as_json:
            text = json.dumps(report_to_dict(result), indent=2)
            click.echo(text)
            if output_file is not None:
                output_file.write_text(text + "\n", encoding="utf-8")
            return

        with ReportWriter(output_file, color=_resolve_color(color, settings)) as writer:
            writer.write_report(build_report(result))
    except OSError as exc:
        click.echo(f"Error: cannot write report: {exc}", err=True)
        sys.exit(1)
