from __future__ import annotations

import threading
from typing import Any

from ..models import FileMetadata, GitInfo
from .ignore_rules import IgnoreRuleSet
from .walk_types import DirectoryBatch, WalkStats


class Findings:
    """Aggregated result of one tree walk.

    Written by the walk under `_lock`; once `TreeWalker.examine` returns
    there are no more writers and the attributes can be read directly.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.regular_files: list[str] = []
        self.ignored_files: list[str] = []
        self.info_map: dict[str, FileMetadata] = {}
        self.git: GitInfo | None = None
        self.stats: WalkStats | None = None
        self._git_lookup_claimed = False

    def __repr__(self) -> str:
        return (
            f"Findings(regular={len(self.regular_files)}, ignored={len(self.ignored_files)}, "
            f"git={self.git.url if self.git else None!r})"
        )

    def merge(self, batch: DirectoryBatch) -> bool:
        """Fold one directory's results in.

        Returns True if this batch is the first to report a `.git` entry,
        meaning the caller now owns the single git lookup of this walk.
        """
        with self._lock:
            for path, info in batch.regular:
                self.regular_files.append(path)
                self.info_map[path] = info
            for path, info in batch.ignored:
                self.ignored_files.append(path)
                self.info_map[path] = info
            if batch.saw_git and not self._git_lookup_claimed:
                self._git_lookup_claimed = True
                return True
            return False

    def set_git_once(self, git: GitInfo) -> bool:
        """Store git info unless some is already stored. Returns whether it was stored."""
        with self._lock:
            if self.git is not None:
                return False
            self.git = git
            return True

    def reconcile(self, rules: IgnoreRuleSet) -> list[str]:
        """Move regular files matched by `rules` over to the ignored list.

        Runs after traversal, since a rule may be discovered after the
        paths it covers were already recorded. Returns the moved paths.
        """
        with self._lock:
            moved = [p for p in self.regular_files if rules.matches(p)]
            if moved:
                moved_set = set(moved)
                self.regular_files = [p for p in self.regular_files if p not in moved_set]
                self.ignored_files.extend(moved)
            return moved

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            return {
                "regular_files": sorted(self.regular_files),
                "ignored_files": sorted(self.ignored_files),
                "git_url": self.git.url if self.git else None,
            }
