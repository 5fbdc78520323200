from __future__ import annotations

import logging
from pathlib import Path

from ..models import LINE_COUNT_UNSET, ClassificationResult, FileMetadata
from .binary import is_binary_data
from .mime import MimeTable, default_mime_table, mime_description
from .modes import Mode, detect_mode, needs_content_check
from .sniffers import SnifferChain, default_assembly_chain, default_head_chain, first_line

logger = logging.getLogger(__name__)

# Largest file read just to settle binary vs. text for an unlabelled file.
MAX_FALLBACK_READ_SIZE = 1024 * 1024 * 1024

DOCUMENT_MODES = frozenset({Mode.MARKDOWN, Mode.TEXT, Mode.RESTRUCTURED, Mode.SCDOC, Mode.ASCIIDOC})
SYSTEMS_MODES = frozenset({Mode.PYTHON, Mode.GO, Mode.RUST, Mode.C, Mode.CPP})
WEB_MODES = frozenset({Mode.HTML, Mode.CSS, Mode.JAVASCRIPT})
SCRIPT_MODES = frozenset({Mode.SHELL, Mode.PERL, Mode.RUBY})


def describe(mode: Mode, is_binary: bool, is_dir: bool) -> tuple[str, str, str]:
    """Return (description, type_color, name_color) for display."""
    if is_dir:
        return "Directory", "magenta", "lightcyan"
    if is_binary:
        return "Binary", "red", "lightred"
    if mode in DOCUMENT_MODES:
        return mode.value, "cyan", "magenta"
    if mode is Mode.CONFIG:
        return mode.value, "cyan", "yellow"
    if mode in SYSTEMS_MODES:
        return mode.value, "cyan", "lightgreen"
    if mode in WEB_MODES:
        return mode.value, "cyan", "yellow"
    if mode in SCRIPT_MODES:
        return mode.value, "cyan", "lightred"
    if mode is Mode.GIT:
        return mode.value, "cyan", "green"
    if mode is not Mode.BLANK:
        return mode.value, "cyan", "lightgreen"
    return "Unknown", "gray", "white"


class Classifier:
    """Decide what kind of content a file holds.

    The filename gives the first guess. When content is supplied it settles
    binary vs. text, gives the line count, and re-labels ambiguous guesses
    through the sniffer chains. Never raises: unreadable files degrade to
    filename-only answers.
    """

    def __init__(
        self,
        mime_table: MimeTable | None = None,
        head_sniffers: SnifferChain | None = None,
        assembly_sniffers: SnifferChain | None = None,
        max_fallback_size: int = MAX_FALLBACK_READ_SIZE,
    ) -> None:
        self._mime_table = mime_table
        self.head_sniffers = head_sniffers or default_head_chain()
        self.assembly_sniffers = assembly_sniffers or default_assembly_chain()
        self.max_fallback_size = max_fallback_size

    @property
    def mime_table(self) -> MimeTable:
        if self._mime_table is None:
            return default_mime_table()
        return self._mime_table

    def classify(
        self,
        filename: str | Path,
        info: FileMetadata,
        data: bytes | None = None,
    ) -> ClassificationResult:
        filename = str(filename)
        if info.is_dir:
            description, type_color, name_color = describe(Mode.BLANK, False, True)
            return ClassificationResult(
                mode=Mode.BLANK,
                is_binary=False,
                description=description,
                type_color=type_color,
                name_color=name_color,
                line_count=LINE_COUNT_UNSET,
                is_dir=True,
            )

        mode = detect_mode(filename)
        is_binary = False
        line_count = LINE_COUNT_UNSET

        if data is not None:
            is_binary = is_binary_data(data)
            if not is_binary:
                line_count = data.count(b"\n")
                mode = self._refine(mode, filename, data)
        elif mode is Mode.BLANK and info.size < self.max_fallback_size:
            is_binary = self._read_binary_flag(filename)

        description, type_color, name_color = describe(mode, is_binary, False)

        if info.size == 0:
            description = "Empty"
        elif description == "Unknown":
            found = mime_description(self.mime_table.get(Path(filename).suffix))
            if found:
                description = found

        return ClassificationResult(
            mode=mode,
            is_binary=is_binary,
            description=description,
            type_color=type_color,
            name_color=name_color,
            line_count=line_count,
        )

    def _refine(self, mode: Mode, filename: str, data: bytes) -> Mode:
        """Re-derive an ambiguous label from content; keep it unless a sniffer is sure."""
        content = lambda: data  # noqa: E731
        if needs_content_check(mode, filename):
            found = self.head_sniffers.sniff(mode, first_line(data), content)
            if found is not None:
                logger.debug(f"{filename}: {mode.value} -> {found.value} from content")
                mode = found
        if mode is Mode.ASSEMBLY:
            found = self.assembly_sniffers.sniff(mode, data, content)
            if found is not None:
                mode = found
        return mode

    def _read_binary_flag(self, filename: str) -> bool:
        try:
            data = Path(filename).read_bytes()
        except OSError as e:
            logger.debug(f"Could not read {filename} for binary detection: {e}")
            return False
        return is_binary_data(data)
