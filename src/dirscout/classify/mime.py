"""Extension to MIME-type lookup, used as the last resort for descriptions."""
from __future__ import annotations

import logging
import mimetypes
import threading
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def _norm_ext(ext: str) -> str:
    ext = ext.strip()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class MimeTable:
    """Read-only mapping from file extension to a MIME type or description.

    Accepts two line formats, `#` comments and blank lines are skipped:
    - mime.types style: `text/x-python  py pyw`
    - one mapping per line: `py  text/x-python`
    """

    def __init__(self, mapping: dict[str, str] | None = None) -> None:
        self._by_ext: dict[str, str] = {}
        for ext, value in (mapping or {}).items():
            self._by_ext[_norm_ext(ext)] = value

    def __len__(self) -> int:
        return len(self._by_ext)

    def __contains__(self, ext: str) -> bool:
        return bool(self.get(ext))

    def get(self, ext: str) -> str:
        """Return the entry for `ext` (with or without a leading dot), or ""."""
        ext = _norm_ext(ext)
        if not ext:
            return ""
        return self._by_ext.get(ext) or self._by_ext.get(ext.lower(), "")

    @staticmethod
    def from_lines(lines: Iterable[str]) -> "MimeTable":
        mapping: dict[str, str] = {}
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            fields = line.split()
            if len(fields) < 2:
                continue
            if "/" in fields[0]:
                for ext in fields[1:]:
                    mapping.setdefault(_norm_ext(ext), fields[0])
            else:
                mapping.setdefault(_norm_ext(fields[0]), " ".join(fields[1:]))
        return MimeTable(mapping)

    @staticmethod
    def from_file(path: str | Path) -> "MimeTable":
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        return MimeTable.from_lines(text.splitlines())

    @staticmethod
    def load(path: str | Path | None) -> "MimeTable":
        """Load from `path`, or the builtin table when no path is given.

        A file that cannot be read yields an empty table, so lookups simply miss.
        """
        if path is None:
            return MimeTable.builtin()
        try:
            table = MimeTable.from_file(path)
        except OSError as e:
            logger.warning(f"Could not read MIME table {path}: {e}")
            return MimeTable()
        logger.debug(f"Loaded {len(table)} MIME mappings from {path}")
        return table

    @staticmethod
    def builtin() -> "MimeTable":
        """Table built from Python's own defaults, ignoring system mime.types files."""
        db = mimetypes.MimeTypes(filenames=())
        mapping = dict(db.types_map[False])
        mapping.update(db.types_map[True])
        return MimeTable(mapping)


_default_table: MimeTable | None = None
_default_lock = threading.Lock()


def default_mime_table() -> MimeTable:
    """Get or create the shared builtin MIME table."""
    global _default_table
    with _default_lock:
        if _default_table is None:
            _default_table = MimeTable.builtin()
        return _default_table


def reset_default_mime_table() -> None:
    """Drop the shared MIME table (for testing)."""
    global _default_table
    with _default_lock:
        _default_table = None


def mime_description(value: str) -> str:
    """Turn `application/x-tar` into `Tar`; other values are returned stripped."""
    description = value.strip()
    if "/" in description:
        subtype = description.split("/", 1)[1]
        if subtype.startswith("x-"):
            subtype = subtype[2:]
        if not subtype:
            return ""
        description = subtype[0].upper() + subtype[1:]
    return description
