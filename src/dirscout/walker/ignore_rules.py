from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def parse_ignore_lines(text: str) -> list[str]:
    """Usable lines of a `.gitignore`/`.ignore` file: trimmed, no blanks, no `#` comments."""
    rules: list[str] = []
    for line in text.splitlines():
        trimmed = line.strip()
        if trimmed and not trimmed.startswith("#"):
            rules.append(trimmed)
    return rules


def normalize_rule(rule: str) -> str:
    """Drop the anchoring slashes gitignore allows around a literal path."""
    rule = rule.strip().replace("\\", "/")
    if rule.startswith("/"):
        rule = rule[1:]
    if rule.endswith("/"):
        rule = rule[:-1]
    return rule


class IgnoreRuleSet:
    """Literal path rules collected while walking.

    Rules are matched as whole leading path segments: the rule `sub` covers
    `sub` and `sub/b.md` but not `subway`. Glob syntax is not interpreted.
    """

    def __init__(self, rules: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._rules: list[str] = []
        self._index: set[str] = set()
        self.add_many(rules)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self):
        return iter(self.rules)

    @property
    def rules(self) -> list[str]:
        with self._lock:
            return list(self._rules)

    def add(self, rule: str) -> bool:
        rule = normalize_rule(rule)
        if not rule:
            return False
        with self._lock:
            if rule in self._index:
                return False
            self._index.add(rule)
            self._rules.append(rule)
            return True

    def add_many(self, rules: Iterable[str]) -> int:
        return sum(1 for r in rules if self.add(r))

    def add_file(self, path: Path) -> int:
        """Add every rule listed in an ignore file. Unreadable files add nothing."""
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug(f"Could not read ignore file {path}: {e}")
            return 0
        added = self.add_many(parse_ignore_lines(text))
        logger.debug(f"Loaded {added} ignore rules from {path}")
        return added

    def matches(self, rel_path: str) -> bool:
        rel_path = rel_path.replace("\\", "/")
        with self._lock:
            if rel_path in self._index:
                return True
            parts = rel_path.split("/")
            for i in range(1, len(parts)):
                if "/".join(parts[:i]) in self._index:
                    return True
            return False
