from __future__ import annotations


class DirscoutError(Exception):
    """Base class for dirscout failures."""


class WalkError(DirscoutError):
    """The tree walk could not complete."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class GitConfigError(DirscoutError):
    """A .git directory could not be read for remote information."""
