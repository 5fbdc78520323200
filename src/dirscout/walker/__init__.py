from .findings import Findings
from .ignore_rules import IgnoreRuleSet
from .walker import TreeWalker, examine

__all__ = ["Findings", "IgnoreRuleSet", "TreeWalker", "examine"]
