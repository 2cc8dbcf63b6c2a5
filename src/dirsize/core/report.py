"""Turn scan results into ordered report lines and write them out."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

import click

from dirsize.models.report import Report, ReportLine, UnitTier
from dirsize.models.scan_result import ScanResult
from dirsize.utils import format_size, unit_tier

log = logging.getLogger(__name__)

TIER_COLORS: dict[UnitTier, str] = {
    UnitTier.GB: "red",
    UnitTier.MB: "yellow",
    UnitTier.KB: "green",
}


def make_line(name: str, size_bytes: int) -> ReportLine:
    """Build a single report line for a named byte count."""
    return ReportLine(name=name, size_text=format_size(size_bytes), tier=unit_tier(size_bytes))


def build_report(result: ScanResult) -> Report:
    """Build the report for a scan.

    Directories are sorted by name; files keep the order in which the scan
    collected them.
    """
    directories = sorted(result.directories, key=lambda d: d.name)
    return Report(
        root=result.root,
        directory_lines=[make_line(d.name, d.size_bytes) for d in directories],
        file_lines=[make_line(f.name, f.size_bytes) for f in result.files],
    )


def report_to_dict(result: ScanResult) -> dict:
    """JSON-ready representation of a scan, ordered like the text report."""
    return {
        "root": str(result.root),
        "total_bytes": result.total_bytes,
        "directories": [
            {
                "name": d.name,
                "size_bytes": d.size_bytes,
                "size": format_size(d.size_bytes),
                "file_count": d.file_count,
            }
            for d in sorted(result.directories, key=lambda d: d.name)
        ],
        "files": [
            {"name": f.name, "size_bytes": f.size_bytes, "size": format_size(f.size_bytes)}
            for f in result.files
        ],
    }


class ReportWriter:
    """Writes report lines to the console and, optionally, a text file.

    Use as a context manager; the output file is opened on entry and is
    always closed on exit, including when an exception propagates.
    Console lines are colored by unit tier, the file gets plain text.
    """

    def __init__(self, output_file: Path | None = None, color: bool | None = None) -> None:
        self.output_file = output_file
        self.color = color
        self._fh: IO[str] | None = None

    def __enter__(self) -> ReportWriter:
        if self.output_file is not None:
            # Undecodable file names come back from scandir surrogate-escaped.
            self._fh = open(self.output_file, "w", encoding="utf-8", errors="surrogateescape")
            log.info("Writing report to %s", self.output_file)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def write_line(self, text: str, tier: UnitTier | None = None) -> None:
        """Echo one line to the console and write it once to the file."""
        if self._fh is not None:
            self._fh.write(text + "\n")
        fg = TIER_COLORS.get(tier) if tier is not None else None
        click.echo(click.style(text, fg=fg) if fg else text, color=self.color)

    def write_report(self, report: Report) -> None:
        """Write the directories section followed by the files section."""
        self.write_line(report.directories_header)
        for line in report.directory_lines:
            self.write_line(str(line), line.tier)
        self.write_line(report.files_header)
        for line in report.file_lines:
            self.write_line(str(line), line.tier)
