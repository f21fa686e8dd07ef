"""Findings, severities and the scan report."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    """Triage ranking for a finding. Never decides pass/fail."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        """Display order, most severe first."""
        return SEVERITY_ORDER.index(self)


SEVERITY_ORDER = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]


@dataclass(frozen=True)
class Finding:
    """One detected potential hardcoded secret."""

    file_path: str
    line_number: int
    matched_text: str
    severity: Severity
    line_content: str
    rule_id: str = ""
    # 1-based offset of matched_text in the untrimmed line; 0 when unknown
    column: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file_path,
            "line": self.line_number,
            "column": self.column,
            "match": self.matched_text,
            "severity": self.severity.value,
            "content": self.line_content,
            "rule_id": self.rule_id,
        }


@dataclass
class Report:
    """Aggregated result of one scan."""

    findings: List[Finding] = field(default_factory=list)

    # Scan metadata
    scan_id: str = ""
    target: str = ""
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_seconds: float = 0.0
    files_scanned: int = 0
    files_skipped: int = 0

    @property
    def passed(self) -> bool:
        """Zero tolerance: any finding at any severity fails the audit."""
        return len(self.findings) == 0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    def by_severity(self) -> Dict[Severity, List[Finding]]:
        """Bucket findings by severity, keeping discovery order inside each bucket."""
        buckets: Dict[Severity, List[Finding]] = {severity: [] for severity in SEVERITY_ORDER}
        for finding in self.findings:
            buckets[finding.severity].append(finding)
        return buckets

    def findings_by_severity(self) -> Dict[str, int]:
        """Count findings by severity level."""
        return {
            severity.value: len(bucket)
            for severity, bucket in self.by_severity().items()
        }

    def sorted_findings(self) -> List[Finding]:
        """Stable ordering for exported reports: severity, file, line, then rule id."""
        return sorted(
            self.findings,
            key=lambda f: (f.severity.rank, f.file_path, f.line_number, f.rule_id),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scan_id": self.scan_id,
            "target": self.target,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "passed": self.passed,
            "total_findings": self.total_findings,
            "findings_by_severity": self.findings_by_severity(),
            "findings": [finding.to_dict() for finding in self.sorted_findings()],
        }
