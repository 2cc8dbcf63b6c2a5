"""Shared test fixtures."""

from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from dirsize.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point settings at an empty temp config dir and drop the singleton."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "dirsize" / "settings.json"


def build_tree(base: Path, layout: dict) -> Path:
    """Create files and directories under *base*.

    Integer values become files of that many bytes, dict values become
    subdirectories.
    """
    for name, content in layout.items():
        path = base / name
        if isinstance(content, dict):
            path.mkdir()
            build_tree(path, content)
        else:
            path.write_bytes(b"x" * content)
    return base


@pytest.fixture
def make_tree(tmp_path):
    """Return a callable building a layout under a fresh ``root`` dir."""
    root = tmp_path / "root"
    root.mkdir()
    return lambda layout: build_tree(root, layout)


@pytest.fixture
def deny(monkeypatch):
    """Make ``os.scandir`` fail for chosen paths.

    Call the returned function with a path and, optionally, the exception
    class to raise (``PermissionError`` by default).
    """
    denied: dict[str, tuple[type[OSError], int]] = {}
    real_scandir = os.scandir

    def fake_scandir(path="."):
        failure = denied.get(os.fspath(path))
        if failure is not None:
            exc_type, code = failure
            raise exc_type(code, os.strerror(code), os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _deny(path, exc_type: type[OSError] = PermissionError) -> None:
        code = errno.EACCES if exc_type is PermissionError else errno.EIO
        denied[os.fspath(path)] = (exc_type, code)

    return _deny
