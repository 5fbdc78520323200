from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
import os
import tomllib

from .report import LINE_COUNT_SIZE_THRESHOLD, READ_SIZE_THRESHOLD

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _expand(p: str) -> str:
    return os.path.expandvars(os.path.expanduser(p))


def _bool(section: dict, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"Invalid {key}: {value!r}. Must be true or false.")
    return value


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one scan of a directory tree."""

    root: Path = Path(".")

    # Walk
    respect_ignore_files: bool = True  # Honour .ignore / .gitignore entries
    respect_hidden_files: bool = True  # Treat dot-prefixed names as ignored
    max_depth: int = 1
    walk_workers: int = 8

    # Classification
    classify_workers: int = 8
    read_size_threshold: int = READ_SIZE_THRESHOLD
    line_count_size_threshold: int = LINE_COUNT_SIZE_THRESHOLD
    mime_types_file: Path | None = None

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    def __post_init__(self):
        """Convert string paths to Path objects and expand ~ and environment variables."""
        if isinstance(self.root, str):
            object.__setattr__(self, 'root', Path(_expand(self.root)))
        if isinstance(self.mime_types_file, str):
            object.__setattr__(self, 'mime_types_file', Path(_expand(self.mime_types_file)))

    def validate(self) -> "ScanConfig":
        if self.max_depth < 1 or self.max_depth > 1000:
            raise ValueError(f"Invalid max_depth: {self.max_depth}. Must be between 1 and 1000.")
        for name in ("walk_workers", "classify_workers"):
            value = getattr(self, name)
            if value < 1 or value > 256:
                raise ValueError(f"Invalid {name}: {value}. Must be between 1 and 256.")
        if self.read_size_threshold <= 0:
            raise ValueError(f"Invalid read_size_threshold: {self.read_size_threshold}. Must be positive.")
        if self.line_count_size_threshold <= 0:
            raise ValueError(f"Invalid line_count_size_threshold: {self.line_count_size_threshold}. Must be positive.")
        if self.line_count_size_threshold > self.read_size_threshold:
            raise ValueError(
                f"line_count_size_threshold ({self.line_count_size_threshold}) must not exceed "
                f"read_size_threshold ({self.read_size_threshold})."
            )
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}. Must be one of: {VALID_LOG_LEVELS}")
        return self

    @staticmethod
    def from_toml(path: str | Path) -> "ScanConfig":
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        scan = data.get("scan", {})
        workers = data.get("workers", {})
        classify = data.get("classify", {})
        logging_config = data.get("logging", {})

        root = Path(_expand(scan.get("root", "."))).resolve()

        mime_types_file = None
        if classify.get("mime_types_file"):
            mime_types_file = Path(_expand(classify["mime_types_file"])).resolve()
        # Environment variable takes precedence if explicitly set
        mime_env = os.environ.get("DIRSCOUT_MIME_TYPES")
        if mime_env:
            mime_types_file = Path(_expand(mime_env)).resolve()

        cfg = ScanConfig(
            root=root,
            respect_ignore_files=_bool(scan, "respect_ignore_files", True),
            respect_hidden_files=_bool(scan, "respect_hidden_files", True),
            max_depth=int(scan.get("max_depth", 1)),
            walk_workers=int(workers.get("walk", 8)),
            classify_workers=int(workers.get("classify", 8)),
            read_size_threshold=int(classify.get("read_size_threshold", READ_SIZE_THRESHOLD)),
            line_count_size_threshold=int(classify.get("line_count_size_threshold", LINE_COUNT_SIZE_THRESHOLD)),
            mime_types_file=mime_types_file,
            log_level=str(logging_config.get("level", "WARNING")).upper(),
            log_file=logging_config.get("file"),
        )
        return cfg.validate()


def load_config(path: str | Path | None = None, root: str | Path | None = None) -> ScanConfig:
    """Load a TOML config, or defaults when no file is given.

    `root`, when given, overrides the configured root.
    """
    if path is not None:
        cfg = ScanConfig.from_toml(path)
    else:
        mime_env = os.environ.get("DIRSCOUT_MIME_TYPES")
        cfg = ScanConfig(mime_types_file=Path(_expand(mime_env)) if mime_env else None).validate()
    if root is not None:
        cfg = dataclasses.replace(cfg, root=Path(_expand(str(root))))
    return cfg
