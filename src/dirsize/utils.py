"""Shared utility functions."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dirsize.models.report import UnitTier

log = logging.getLogger(__name__)

# Checked high to low; the first tier whose divisor fits wins.
_SCALED_TIERS = (UnitTier.GB, UnitTier.MB, UnitTier.KB)


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def dir_info(path: Path | str, *, follow_symlinks: bool = False) -> tuple[int, int]:
    """Calculate total size and file count of a directory tree.

    Walks depth-first with an explicit stack. Any directory or file that
    raises ``PermissionError`` contributes nothing and the walk carries on
    with its siblings; every other ``OSError`` propagates to the caller.

    Directory symlinks are only descended into when *follow_symlinks* is
    set, in which case each directory is visited at most once (keyed on
    device and inode) so link cycles terminate. Dangling links count as the
    size of the link itself.

    Returns:
        (total_bytes, file_count) tuple.
    """
    total = 0
    count = 0
    seen: set[tuple[int, int]] = set()
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        if follow_symlinks:
            try:
                st = os.stat(current)
            except PermissionError:
                log.debug("Permission denied, skipping: %s", current)
                continue
            key = (st.st_dev, st.st_ino)
            if key in seen:
                log.debug("Already visited, skipping: %s", current)
                continue
            seen.add(key)
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=follow_symlinks):
                            stack.append(entry.path)
                        else:
                            total += entry_size(entry, follow_symlinks=follow_symlinks)
                            count += 1
                    except PermissionError:
                        log.debug("Permission denied, skipping: %s", entry.path)
        except PermissionError:
            log.debug("Permission denied, skipping: %s", current)
    return total, count


def entry_size(entry: os.DirEntry, *, follow_symlinks: bool = False) -> int:
    """Size of a scandir entry; a dangling link counts as the link itself."""
    try:
        return entry.stat(follow_symlinks=follow_symlinks).st_size
    except FileNotFoundError:
        if not (follow_symlinks and entry.is_symlink()):
            raise
        log.debug("Dangling link, counting the link itself: %s", entry.path)
        return entry.stat(follow_symlinks=False).st_size


def dir_size(path: Path | str, *, follow_symlinks: bool = False) -> int:
    """Calculate total size of a directory tree."""
    return dir_info(path, follow_symlinks=follow_symlinks)[0]


def unit_tier(size_bytes: int) -> UnitTier:
    """Pick the display unit for a byte count (base 1024)."""
    for tier in _SCALED_TIERS:
        if size_bytes >= tier.divisor:
            return tier
    return UnitTier.BYTES


def format_size(size_bytes: int) -> str:
    """Convert byte count to a human-readable string.

    Below 1 KB the integer count is kept (``"500 bytes"``); larger values
    get exactly two decimals (``"1.50 KB"``).
    """
    tier = unit_tier(size_bytes)
    if tier is UnitTier.BYTES:
        return f"{size_bytes} bytes"
    return f"{size_bytes / tier.divisor:.2f} {tier.label}"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
