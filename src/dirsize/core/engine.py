"""Parallel scan of the immediate children of a root directory."""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from dirsize.models.scan_result import DirectoryEntry, FileEntry, ScanResult
from dirsize.utils import dir_info, entry_size, format_elapsed

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (child_name, status_message)


class ScanError(Exception):
    """Raised when a scan fails for any reason other than a permission error."""


def default_max_workers() -> int:
    """Worker cap used when none is configured (same as ThreadPoolExecutor)."""
    return min(32, (os.cpu_count() or 1) + 4)


class ScanEngine:
    """Sizes every immediate child of a root directory concurrently.

    One task is submitted per subdirectory (a full recursive walk) and one
    per file (a single stat). Tasks share nothing except the result lists,
    which are appended to under a lock, so their order reflects completion
    order rather than directory order.
    """

    def __init__(self, max_workers: int | None = None, follow_symlinks: bool = False) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self.follow_symlinks = follow_symlinks

    def scan(self, root: Path | str, on_progress: ProgressCallback | None = None) -> ScanResult:
        """Scan *root* and return the sizes of its immediate children.

        Args:
            root: Existing directory to scan.
            on_progress: Optional callback receiving (child_name, status)
                where status is "scanning", "done" or "error".

        Raises:
            ScanError: If the root cannot be listed, or if any child fails
                with an error other than ``PermissionError``.
        """
        root = Path(root)
        started = time.perf_counter()
        subdirs, files = self._list_children(root)
        log.info("Scanning %s: %d subdirectories, %d files", root, len(subdirs), len(files))

        result = ScanResult(root=root)
        lock = threading.Lock()
        failures: list[tuple[str, OSError]] = []

        def _measure(entry: os.DirEntry, is_dir: bool) -> None:
            if on_progress:
                on_progress(entry.name, "scanning")
            try:
                if is_dir:
                    size, count = dir_info(entry.path, follow_symlinks=self.follow_symlinks)
                    item: DirectoryEntry | FileEntry = DirectoryEntry(entry.name, size, count)
                else:
                    item = FileEntry(entry.name, self._file_size(entry))
            except OSError as exc:
                log.exception("Failed to size '%s'", entry.path)
                with lock:
                    failures.append((entry.path, exc))
                if on_progress:
                    on_progress(entry.name, "error")
                return
            with lock:
                if is_dir:
                    result.directories.append(item)
                else:
                    result.files.append(item)
            if on_progress:
                on_progress(entry.name, "done")

        children = len(subdirs) + len(files)
        if children:
            max_workers = min(self.max_workers or default_max_workers(), children)
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(_measure, d, True) for d in subdirs]
                futures += [executor.submit(_measure, f, False) for f in files]
                for future in futures:
                    future.result()

        if failures:
            path, exc = failures[0]
            raise ScanError(f"Failed to scan {path}: {exc}") from exc

        result.elapsed = time.perf_counter() - started
        log.info("Scanned %s in %s", root, format_elapsed(result.elapsed))
        return result

    def _list_children(self, root: Path) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
        """Split the entries of *root* into (subdirectories, files)."""
        subdirs: list[os.DirEntry] = []
        files: list[os.DirEntry] = []
        try:
            with os.scandir(root) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=self.follow_symlinks):
                        subdirs.append(entry)
                    else:
                        files.append(entry)
        except OSError as exc:
            raise ScanError(f"Cannot list {root}: {exc}") from exc
        return subdirs, files

    def _file_size(self, entry: os.DirEntry) -> int:
        try:
            return entry_size(entry, follow_symlinks=self.follow_symlinks)
        except PermissionError:
            log.debug("Permission denied, skipping: %s", entry.path)
            return 0
