"""dirsize data models."""

from dirsize.models.scan_result import DirectoryEntry, FileEntry, ScanResult
from dirsize.models.report import Report, ReportLine, UnitTier

__all__ = [
    "DirectoryEntry",
    "FileEntry",
    "Report",
    "ReportLine",
    "ScanResult",
    "UnitTier",
]
