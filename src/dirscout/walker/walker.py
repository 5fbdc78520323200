from __future__ import annotations

import logging
import os
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ..errors import GitConfigError, WalkError
from ..git import locate_git
from ..models import FileMetadata, GitInfo
from ..paths import depth_of, has_hidden_segment, split_path
from .findings import Findings
from .ignore_rules import IgnoreRuleSet
from .walk_types import DirectoryBatch, WalkStats

logger = logging.getLogger(__name__)

IGNORE_FILE_NAMES = (".ignore", ".gitignore")


@dataclass
class TreeWalker:
    """Walk a directory tree on a bounded thread pool and collect Findings.

    Each worker scans one directory into a local DirectoryBatch; the calling
    thread merges batches into the shared Findings and schedules the
    subdirectories they report. `examine` returns once every batch is merged,
    the git lookup (if any) has finished, and late ignore rules are applied.
    """

    respect_ignore_files: bool = True
    respect_hidden_files: bool = True
    max_depth: int = 1
    workers: int = 8
    git_locator: Callable[[Path], GitInfo] = field(default=locate_git, repr=False)

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"Invalid max_depth: {self.max_depth}. Must be 0 or more.")
        if self.workers < 1:
            raise ValueError(f"Invalid workers: {self.workers}. Must be at least 1.")

    def examine(self, root: str | Path) -> Findings:
        root = Path(root)
        if not root.is_dir():
            raise WalkError(str(root), "not a directory")

        start = time.time()
        findings = Findings()
        rules = IgnoreRuleSet()
        stats = WalkStats()

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="dirscout-walk") as executor:
            pending: dict[Future, str] = {
                executor.submit(self._scan_dir, root, root, "", rules): ".",
            }
            git_future: Future | None = None
            try:
                while pending:
                    done, _ = wait(pending, return_when=FIRST_COMPLETED)
                    for future in done:
                        pending.pop(future)
                        batch = future.result()
                        stats.dirs_scanned += 1
                        stats.entries_seen += batch.entries_seen
                        stats.entries_skipped += batch.entries_skipped
                        if findings.merge(batch):
                            git_future = executor.submit(self._lookup_git, root / ".git", findings)
                        for abs_dir, rel_dir in batch.subdirs:
                            pending[executor.submit(self._scan_dir, root, abs_dir, rel_dir, rules)] = rel_dir
                if git_future is not None:
                    git_future.result()
            except BaseException:
                for future in pending:
                    future.cancel()
                raise

        moved = findings.reconcile(rules)
        stats.rules = len(rules)
        stats.reclassified = len(moved)
        stats.regular_files = len(findings.regular_files)
        stats.ignored_files = len(findings.ignored_files)
        stats.elapsed_seconds = time.time() - start
        findings.stats = stats

        logger.info(
            f"Walked {root}: {stats.regular_files} regular, {stats.ignored_files} ignored "
            f"({stats.reclassified} by ignore rules) in {stats.dirs_scanned} dirs, "
            f"{stats.elapsed_seconds:.2f}s"
        )
        return findings

    def _scan_dir(self, root: Path, abs_dir: Path, rel_dir: str, rules: IgnoreRuleSet) -> DirectoryBatch:
        """List one directory and sort its entries into a batch (runs on a worker)."""
        batch = DirectoryBatch(rel_dir=rel_dir)
        try:
            with os.scandir(abs_dir) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise WalkError(str(abs_dir), f"could not read directory ({e.strerror or e})") from e

        for entry in entries:
            rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            try:
                info = FileMetadata.from_stat(entry.stat(follow_symlinks=False))
            except OSError as e:
                raise WalkError(entry.path, f"os.lstat error ({e.strerror or e})") from e
            batch.entries_seen += 1
            if not self._visit(root, rel, info, batch, rules):
                batch.entries_skipped += 1
                continue
            if info.is_dir and depth_of(rel) < self.max_depth:
                batch.subdirs.append((Path(entry.path), rel))
        return batch

    def _visit(self, root: Path, rel: str, info: FileMetadata, batch: DirectoryBatch, rules: IgnoreRuleSet) -> bool:
        """Record one path. Returns False when the path is skipped altogether."""
        if self.respect_hidden_files and has_hidden_segment(rel):
            return False

        parts = split_path(rel)
        if len(parts) > self.max_depth:
            return False

        top = parts[0]
        head = top.lower()
        if head == "vendor":
            batch.ignored.append((rel, info))
            return True
        if head == ".git":
            batch.ignored.append((rel, info))
            batch.saw_git = True
            return True

        if self.respect_ignore_files and top in IGNORE_FILE_NAMES and len(parts) == 1:
            rules.add_file(root / top)
        if self.respect_hidden_files and top.startswith("."):
            rules.add(top)

        batch.regular.append((rel, info))
        return True

    def _lookup_git(self, git_dir: Path, findings: Findings) -> None:
        try:
            git = self.git_locator(git_dir)
        except GitConfigError as e:
            logger.debug(f"No git info from {git_dir}: {e}")
            return
        if findings.set_git_once(git):
            logger.debug(f"Git remote: {git.url}")


def examine(
    root: str | Path,
    respect_ignore_files: bool = True,
    respect_hidden_files: bool = True,
    max_depth: int = 1,
    workers: int = 8,
) -> Findings:
    """Walk `root` and return its Findings. Raises WalkError if the walk fails."""
    walker = TreeWalker(
        respect_ignore_files=respect_ignore_files,
        respect_hidden_files=respect_hidden_files,
        max_depth=max_depth,
        workers=workers,
    )
    return walker.examine(root)
