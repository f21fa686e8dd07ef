"""Suppression-then-detection evaluation of a single line."""

from typing import List

from .models import Finding
from .rules import RuleSet


class LineScanner:
    """Apply a rule set to individual lines."""

    def __init__(self, rule_set: RuleSet):
        self.rule_set = rule_set

    def scan_line(self, raw_line: str, line_number: int, file_path: str = "") -> List[Finding]:
        """
        Scan one line.

        Suppressions run first against the raw line; any match returns no
        findings. Otherwise every rule is evaluated and each matching rule
        yields one finding built from its first occurrence. The column is
        1-based against the untrimmed line.

        Args:
            raw_line: Untrimmed line text
            line_number: 1-based line number
            file_path: Path recorded on the findings

        Returns:
            Findings for this line, in rule order
        """
        if self.rule_set.suppression_for(raw_line) is not None:
            return []

        findings: List[Finding] = []
        content = raw_line.strip()

        for rule in self.rule_set.rules:
            match = rule.search(raw_line)
            if match is None:
                continue
            findings.append(Finding(
                file_path=file_path,
                line_number=line_number,
                matched_text=match.group(0),
                severity=rule.severity,
                line_content=content,
                rule_id=rule.rule_id,
                column=match.start() + 1,
            ))

        return findings
