"""Report line dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class UnitTier(Enum):
    """Display unit for a byte count, with its divisor."""

    BYTES = ("bytes", 1)
    KB = ("KB", 1024)
    MB = ("MB", 1024**2)
    GB = ("GB", 1024**3)

    def __init__(self, label: str, divisor: int) -> None:
        self.label = label
        self.divisor = divisor


@dataclass(frozen=True, slots=True)
class ReportLine:
    """One formatted entry of the report."""

    name: str
    size_text: str
    tier: UnitTier

    def __str__(self) -> str:
        return f"{self.name}\t{self.size_text}"


@dataclass(slots=True)
class Report:
    """Ordered report lines derived from a ScanResult."""

    root: Path
    directory_lines: list[ReportLine] = field(default_factory=list)
    file_lines: list[ReportLine] = field(default_factory=list)

    @property
    def directories_header(self) -> str:
        return f"{self.root} {len(self.directory_lines)} SubDirectories:"

    @property
    def files_header(self) -> str:
        return f"{self.root} {len(self.file_lines)} Files:"
