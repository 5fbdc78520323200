"""File classification: filename table, binary heuristic, content sniffers, MIME fallback."""

from .modes import Mode

__all__ = ["Mode"]
