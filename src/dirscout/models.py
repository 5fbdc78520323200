from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Any

from .classify.modes import Mode

LINE_COUNT_UNSET = -1


@dataclass(frozen=True)
class FileMetadata:
    """Filesystem metadata captured when a path is visited.

    Not refreshed afterwards, so it can go stale relative to the disk.
    """
    size: int
    mtime: float
    is_dir: bool

    @staticmethod
    def from_stat(st: os.stat_result) -> "FileMetadata":
        return FileMetadata(
            size=int(st.st_size),
            mtime=float(st.st_mtime),
            is_dir=stat.S_ISDIR(st.st_mode),
        )


@dataclass(frozen=True)
class GitInfo:
    url: str


@dataclass(frozen=True)
class ClassificationResult:
    mode: Mode
    is_binary: bool
    description: str
    type_color: str
    name_color: str
    line_count: int = LINE_COUNT_UNSET
    is_dir: bool = False

    @property
    def has_line_count(self) -> bool:
        return self.line_count != LINE_COUNT_UNSET

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "is_binary": self.is_binary,
            "is_dir": self.is_dir,
            "description": self.description,
            "line_count": self.line_count,
        }
