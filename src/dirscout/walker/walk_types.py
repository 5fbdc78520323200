"""Data classes for the parallel tree walk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..models import FileMetadata


@dataclass
class DirectoryBatch:
    """What one worker found in one directory, merged into Findings afterwards."""

    rel_dir: str
    regular: list[tuple[str, FileMetadata]] = field(default_factory=list)
    ignored: list[tuple[str, FileMetadata]] = field(default_factory=list)
    subdirs: list[tuple[Path, str]] = field(default_factory=list)  # (abs_path, rel_path)
    saw_git: bool = False
    entries_seen: int = 0
    entries_skipped: int = 0


@dataclass
class WalkStats:
    """Statistics from a walk."""

    dirs_scanned: int = 0
    entries_seen: int = 0
    entries_skipped: int = 0
    regular_files: int = 0
    ignored_files: int = 0
    rules: int = 0
    reclassified: int = 0
    elapsed_seconds: float = 0.0
