from __future__ import annotations

# Same window git uses when deciding whether a blob is binary.
SAMPLE_SIZE = 8000
NON_TEXT_RATIO = 0.30

_TEXT_CONTROL_BYTES = frozenset(b"\t\n\r\f\b\x1b\x07\x0b")


def _is_non_text(byte: int) -> bool:
    return (byte < 0x20 and byte not in _TEXT_CONTROL_BYTES) or byte == 0x7F


def is_binary_data(data: bytes) -> bool:
    """Decide whether `data` looks like binary content.

    A NUL byte anywhere means binary. Otherwise only a bounded prefix is
    checked for control bytes. Empty data counts as text.
    """
    if not data:
        return False
    if b"\x00" in data:
        return True
    sample = data[:SAMPLE_SIZE]
    non_text = sum(1 for b in sample if _is_non_text(b))
    return non_text / len(sample) > NON_TEXT_RATIO
