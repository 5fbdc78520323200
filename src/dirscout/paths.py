"""Helpers for the forward-slash relative paths recorded by the walk."""
from __future__ import annotations


def split_path(rel: str) -> list[str]:
    return rel.replace("\\", "/").split("/")


def depth_of(rel: str) -> int:
    return len(split_path(rel))


def has_hidden_segment(rel: str) -> bool:
    """True when a segment after the first starts with a dot."""
    return "/." in rel.replace("\\", "/")
