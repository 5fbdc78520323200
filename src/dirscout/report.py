"""Turn walk Findings into a per-file report by classifying every regular file."""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .classify.classifier import Classifier
from .models import LINE_COUNT_UNSET, ClassificationResult, FileMetadata
from .walker.findings import Findings

logger = logging.getLogger(__name__)

# Files at or above this size are not read at all.
READ_SIZE_THRESHOLD = 1000 * 1024
# Text files at or above this size are read but their lines are not reported.
LINE_COUNT_SIZE_THRESHOLD = 100 * 1024

TOO_LARGE = "too large to analyze"


@dataclass(frozen=True)
class ReportEntry:
    path: str
    info: FileMetadata
    classification: ClassificationResult
    size_description: str

    @property
    def is_dir(self) -> bool:
        return self.info.is_dir

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "size": self.info.size,
            "mtime": self.info.mtime,
            "size_description": self.size_description,
            **self.classification.to_dict(),
        }


@dataclass
class Report:
    files: list[ReportEntry] = field(default_factory=list)
    directories: list[ReportEntry] = field(default_factory=list)
    ignored_count: int = 0
    git_url: str | None = None
    failed: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [e.to_dict() for e in self.files],
            "directories": [e.path for e in self.directories],
            "ignored_count": self.ignored_count,
            "git_url": self.git_url,
        }


def size_description(result: ClassificationResult, size: int, was_read: bool) -> str:
    if not was_read:
        return TOO_LARGE
    if result.is_binary:
        return f"{size} bytes"
    if result.line_count != LINE_COUNT_UNSET:
        return f"{result.line_count} lines"
    return TOO_LARGE


def format_elapsed(seconds: float) -> str:
    """Compact age: `45s`, `12m`, `3h4m`, `2d5h`."""
    seconds = max(0.0, seconds)
    if seconds < 60:
        return f"{int(seconds)}s"
    if seconds < 3600:
        return f"{int(seconds // 60)}m"
    if seconds < 86400:
        hours, rest = divmod(int(seconds), 3600)
        return f"{hours}h{rest // 60}m"
    days, rest = divmod(int(seconds), 86400)
    return f"{days}d{rest // 3600}h"


def _classify_one(
    classifier: Classifier,
    root: Path,
    rel: str,
    info: FileMetadata,
    read_size_threshold: int,
    line_count_size_threshold: int,
) -> ReportEntry:
    abs_path = root / rel
    data: bytes | None = None
    if not info.is_dir and info.size < read_size_threshold:
        try:
            data = abs_path.read_bytes()
        except OSError as e:
            logger.debug(f"Could not read {abs_path}: {e}")

    result = classifier.classify(abs_path, info, data)
    if result.has_line_count and info.size >= line_count_size_threshold:
        result = replace(result, line_count=LINE_COUNT_UNSET)
    return ReportEntry(
        path=rel,
        info=info,
        classification=result,
        size_description=size_description(result, info.size, data is not None),
    )


def build_report(
    findings: Findings,
    classifier: Classifier,
    root: str | Path = ".",
    *,
    read_size_threshold: int = READ_SIZE_THRESHOLD,
    line_count_size_threshold: int = LINE_COUNT_SIZE_THRESHOLD,
    workers: int = 8,
) -> Report:
    """Classify every regular file in `findings` (paths relative to `root`)."""
    start = time.time()
    root = Path(root)
    report = Report(
        ignored_count=len(findings.ignored_files),
        git_url=findings.git.url if findings.git else None,
    )

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dirscout-classify") as executor:
        futures = {}
        for rel in findings.regular_files:
            info = findings.info_map.get(rel)
            if info is None:
                logger.warning(f"No metadata recorded for {rel}, skipping")
                continue
            futures[executor.submit(
                _classify_one, classifier, root, rel, info,
                read_size_threshold, line_count_size_threshold,
            )] = rel

        for future in as_completed(futures):
            rel = futures[future]
            try:
                entry = future.result()
            except Exception as e:
                logger.error(f"Classification crashed for {rel}: {e}")
                report.failed.append(rel)
                continue
            if entry.is_dir:
                report.directories.append(entry)
            else:
                report.files.append(entry)

    report.files.sort(key=lambda e: e.path)
    report.directories.sort(key=lambda e: e.path)
    report.elapsed_seconds = time.time() - start
    logger.info(
        f"Classified {len(report.files)} files and {len(report.directories)} directories "
        f"in {report.elapsed_seconds:.2f}s"
    )
    return report
