"""Read the remote URL of a repository from its `.git/config` file."""
from __future__ import annotations

import logging
from pathlib import Path

from .errors import GitConfigError
from .models import GitInfo

logger = logging.getLogger(__name__)


def transform_git_url(url: str) -> str:
    """Turn `git@host:owner/repo` into `https://host/owner/repo`.

    Anything that is not an scp-style SSH address is returned unchanged.
    """
    if not url.startswith("git@"):
        return url
    rest = url[len("git@"):]
    if ":" not in rest:
        return url
    return "https://" + rest.replace(":", "/", 1)


def parse_git_config_url(text: str) -> str | None:
    """Return the first `url = ...` value in a git config, in file order.

    Section headers are not interpreted, so with several remotes the first
    one listed wins.
    """
    for line in text.splitlines():
        trimmed = line.strip()
        if "=" not in trimmed:
            continue
        key, value = trimmed.split("=", 1)
        if key.strip() == "url":
            return transform_git_url(value.strip())
    return None


def locate_git(git_dir: str | Path) -> GitInfo:
    """Build GitInfo from a `.git` directory.

    Raises GitConfigError if `git_dir` is not a directory, if its config
    cannot be read, or if the config has no `url` entry.
    """
    p = Path(git_dir)
    if not p.is_dir():
        raise GitConfigError(f"not a .git directory: {p}")
    try:
        text = (p / "config").read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise GitConfigError(f"could not read .git/config: {e}") from e

    url = parse_git_config_url(text)
    if url is None:
        raise GitConfigError(f"no remote url in {p / 'config'}")
    logger.debug(f"Found git remote {url} in {p}")
    return GitInfo(url=url)
