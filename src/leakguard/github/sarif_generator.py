"""SARIF format generator for GitHub Code Scanning."""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional

from ..core.models import Report, Severity
from ..core.rules import RuleSet, default_rule_set
from ..utils.exceptions import ReportError
from ..utils.logger import get_logger
from ..version import VERSION

logger = get_logger(__name__)


class SARIFGenerator:
    """Generate SARIF 2.1.0 documents from a scan report."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
    TOOL_NAME = "LeakGuard"

    def __init__(self, rule_set: Optional[RuleSet] = None):
        self.rule_set = rule_set or default_rule_set()

    def build(self, report: Report) -> Dict[str, Any]:
        """Build the SARIF document as a dictionary."""
        return {
            "version": self.SARIF_VERSION,
            "$schema": self.SARIF_SCHEMA,
            "runs": [self._build_run(report)],
        }

    def generate(self, report: Report, output_file: str) -> None:
        """Write a SARIF file for the report."""
        try:
            with open(output_file, "w") as f:
                json.dump(self.build(report), f, indent=2)
        except OSError as e:
            raise ReportError(
                f"Failed to write SARIF report: {output_file}",
                details={"error": str(e)}
            ) from e

        logger.info(f"SARIF report saved to {output_file}")

    def _build_run(self, report: Report) -> Dict[str, Any]:
        """Build SARIF run object."""
        return {
            "tool": self._build_tool(),
            "results": self._build_results(report),
            "columnKind": "unicodeCodePoints",
        }

    def _build_tool(self) -> Dict[str, Any]:
        """Build SARIF tool object with every detection rule."""
        return {
            "driver": {
                "name": self.TOOL_NAME,
                "version": VERSION,
                "rules": [
                    {
                        "id": rule.rule_id,
                        "name": rule.title,
                        "shortDescription": {"text": rule.title},
                        "fullDescription": {"text": rule.description},
                        "defaultConfiguration": {"level": self._map_severity(rule.severity)},
                        "properties": {"cwe": "CWE-798"},  # Use of Hard-coded Credentials
                    }
                    for rule in self.rule_set.rules
                ],
            }
        }

    def _build_results(self, report: Report) -> List[Dict[str, Any]]:
        """Build SARIF results from findings."""
        results = []
        root = Path(report.target) if report.target else None

        for finding in report.sorted_findings():
            column = finding.column or 1

            results.append({
                "ruleId": finding.rule_id or "unknown",
                "level": self._map_severity(finding.severity),
                "message": {
                    "text": f"{finding.severity.value}: possible hardcoded credential '{finding.matched_text}'"
                },
                "locations": [{
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": self._relative_uri(finding.file_path, root),
                            "uriBaseId": "%SRCROOT%"
                        },
                        "region": {
                            "startLine": finding.line_number,
                            "startColumn": column,
                            "endLine": finding.line_number,
                            "endColumn": column + len(finding.matched_text),
                        }
                    }
                }],
                "properties": {"severity": finding.severity.value},
            })

        return results

    def _relative_uri(self, file_path: str, root: Optional[Path]) -> str:
        path = Path(file_path)
        if root is not None:
            try:
                path = path.relative_to(root)
            except ValueError:
                pass
        return path.as_posix()

    def _map_severity(self, severity: Severity) -> str:
        """Map finding severity to SARIF level."""
        mapping = {
            Severity.CRITICAL: "error",
            Severity.HIGH: "error",
            Severity.MEDIUM: "warning",
            Severity.LOW: "note",
        }
        return mapping.get(severity, "warning")
