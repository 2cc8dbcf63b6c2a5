"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class FileEntry:
    """Immediate file of the scanned root."""

    name: str
    size_bytes: int


@dataclass(slots=True)
class DirectoryEntry:
    """Immediate subdirectory of the scanned root.

    ``size_bytes`` is the recursive total of every file that could be read;
    subtrees that raised a permission error contribute nothing.
    """

    name: str
    size_bytes: int
    file_count: int = 0


@dataclass(slots=True)
class ScanResult:
    """Sizes of the immediate children of one root directory.

    Both lists are in completion order, which depends on thread scheduling.
    """

    root: Path
    directories: list[DirectoryEntry] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def total_bytes(self) -> int:
        return sum(d.size_bytes for d in self.directories) + sum(f.size_bytes for f in self.files)
