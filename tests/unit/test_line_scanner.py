"""Unit tests for line-level suppression and detection."""

import pytest

from leakguard.core.line_scanner import LineScanner
from leakguard.core.models import Severity
from leakguard.core.rules import default_rule_set

from conftest import BCRYPT_HASH


@pytest.fixture
def scanner():
    return LineScanner(default_rule_set())


class TestScenarios:
    """Reference lines and their expected outcomes."""

    def test_password_assignment_is_high(self, scanner):
        findings = scanner.scan_line('const password = "hunter2XY";', 7, "app.js")

        assert len(findings) == 1
        finding = findings[0]
        assert finding.severity is Severity.HIGH
        assert finding.matched_text == 'password = "hunter2XY"'
        assert finding.line_number == 7
        assert finding.file_path == "app.js"
        assert finding.rule_id == "literal-secret-assignment"
        assert finding.column == 7

    def test_column_counts_indentation(self, scanner):
        findings = scanner.scan_line('        const x = "admin@123";', 1)

        assert findings[0].column == 20
        assert findings[0].line_content == 'const x = "admin@123";'

    def test_known_bad_literal_is_critical(self, scanner):
        findings = scanner.scan_line('const testPwd = "admin@123";', 1)

        assert [(f.severity, f.matched_text) for f in findings] == [
            (Severity.CRITICAL, "admin@123"),
        ]

    def test_empty_password_is_clean(self, scanner):
        assert scanner.scan_line('password: ""', 1) == []

    def test_hash_is_medium(self, scanner):
        findings = scanner.scan_line(f'hash = "{BCRYPT_HASH}"', 1)

        assert [(f.severity, f.matched_text) for f in findings] == [
            (Severity.MEDIUM, BCRYPT_HASH),
        ]

    def test_hash_with_rotation_marker_is_clean(self, scanner):
        assert scanner.scan_line(f'hash = "{BCRYPT_HASH}" TEMP_HASH_NEEDS_RESET', 1) == []

    def test_config_read_is_clean(self, scanner):
        assert scanner.scan_line("const password = process.env.SECRET;", 1) == []


class TestEvaluation:

    def test_every_matching_rule_reports(self, scanner):
        findings = scanner.scan_line('password = "password123"', 3)

        assert [f.rule_id for f in findings] == ["literal-secret-assignment", "known-bad-literal"]
        assert [f.matched_text for f in findings] == ['password = "password123"', "password123"]

    def test_three_rules_on_one_line(self, scanner):
        line = f'password = "{BCRYPT_HASH}" // was test123'
        findings = scanner.scan_line(line, 1)

        assert {f.severity for f in findings} == {Severity.HIGH, Severity.CRITICAL, Severity.MEDIUM}

    def test_one_finding_per_rule_per_line(self, scanner):
        findings = scanner.scan_line("admin@123 admin@123 test123", 1)

        assert len(findings) == 1
        assert findings[0].matched_text == "admin@123"

    def test_suppression_vetoes_every_rule(self, scanner):
        # The empty assignment suppresses the known-bad literal on the same line
        assert scanner.scan_line('let password = ""; const other = "admin@123";', 1) == []

    def test_interpolation_vetoes_known_bad_literal(self, scanner):
        assert scanner.scan_line("const password = `${user}admin@123`;", 1) == []

    def test_interpolation_before_field_does_not_suppress(self, scanner):
        findings = scanner.scan_line('const url = `${host}`; password = "hunter22"', 1)

        assert [f.severity for f in findings] == [Severity.HIGH]

    def test_suppression_sees_raw_line(self, scanner):
        # Leading whitespace is kept for matching but trimmed for display
        findings = scanner.scan_line('    password = "hunter22"   ', 4)

        assert findings[0].line_content == 'password = "hunter22"'

    def test_clean_line(self, scanner):
        assert scanner.scan_line("const total = price * quantity;", 1) == []

    def test_findings_are_frozen(self, scanner):
        finding = scanner.scan_line("test123", 1)[0]
        with pytest.raises(AttributeError):
            finding.line_number = 2
