from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from dirscout.classify.mime import reset_default_mime_table


def write_tree(root: Path, files: dict[str, str | bytes | None]) -> Path:
    """Create files under `root`; a value of None makes a directory."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        p = root / rel
        if content is None:
            p.mkdir(parents=True, exist_ok=True)
            continue
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str | bytes | None]], Path]:
    def _make(files: dict[str, str | bytes | None]) -> Path:
        return write_tree(tmp_path / "tree", files)
    return _make


@pytest.fixture
def repo_tree(make_tree) -> Path:
    """a.py, sub/b.md, a .git with an SSH remote, and a .gitignore naming `sub`."""
    return make_tree({
        "a.py": "print('hello')\n",
        "sub/b.md": "# B\n",
        ".git/config": '[core]\n\tbare = false\n[remote "origin"]\n\turl = git@github.com:acme/widgets\n',
        ".git/HEAD": "ref: refs/heads/main\n",
        ".gitignore": "# build output\n\nsub\n",
    })


@pytest.fixture(autouse=True)
def _fresh_mime_table():
    reset_default_mime_table()
    yield
    reset_default_mime_table()
