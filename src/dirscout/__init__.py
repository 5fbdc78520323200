"""dirscout: concurrent directory inspector.

Walks a directory tree, separates regular files from ignored/vendored/hidden
paths, classifies each file's content type, and reports the git remote URL
when the tree is a repository.

Public API:
- ScanConfig
- TreeWalker / examine
- Classifier
- build_report
"""

from .classify.classifier import Classifier
from .config import ScanConfig
from .errors import DirscoutError, GitConfigError, WalkError
from .report import build_report
from .walker.walker import TreeWalker, examine

__all__ = [
    "ScanConfig",
    "TreeWalker",
    "examine",
    "Classifier",
    "build_report",
    "DirscoutError",
    "WalkError",
    "GitConfigError",
]
