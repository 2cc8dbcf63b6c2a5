"""dirsize: disk space usage per immediate child of a directory."""

__version__ = "0.1.0"
