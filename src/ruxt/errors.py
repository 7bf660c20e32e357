from __future__ import annotations

from pathlib import Path


class RuxtError(Exception):
    """Base for every error raised while expanding annotated functions."""


class ConfigurationError(RuxtError):
    pass


class PagesDirectoryNotFoundError(ConfigurationError):
    """
    The pages directory is missing or is not a directory.
    Fatal: the annotated function cannot be expanded without it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"The pages directory does not exist: {path}")


class ExpansionError(RuxtError):
    def __init__(self, message: str, filename: str = "<unknown>", lineno: int | None = None) -> None:
        self.filename = filename
        self.lineno = lineno
        where = f"{filename}:{lineno}" if lineno is not None else filename
        super().__init__(f"{where}: {message}")


class InvalidPageNameError(ConfigurationError):
    """A page path segment is not a usable Python identifier (404.py, my-page/, class.py)."""

    def __init__(self, path: Path, segment: str) -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Page name {segment!r} is not a valid Python identifier: {path}")
