
"""Core scanning engine."""

from .models import Severity, Finding, Report
from .rules import Rule, SuppressionRule, RuleSet, default_rule_set
from .walker import walk, TreeWalker
from .line_scanner import LineScanner
from .file_scanner import FileScanner
from .scanner import Engine, ReportAggregator

__all__ = [
    "Severity",
    "Finding",
    "Report",
    "Rule",
    "SuppressionRule",
    "RuleSet",
    "default_rule_set",
    "walk",
    "TreeWalker",
    "LineScanner",
    "FileScanner",
    "Engine",
    "ReportAggregator",
]
