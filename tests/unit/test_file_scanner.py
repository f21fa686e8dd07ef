"""Unit tests for single-file scanning."""

import logging

import pytest

from leakguard.core.file_scanner import FileScanner
from leakguard.core.line_scanner import LineScanner
from leakguard.core.models import Severity
from leakguard.core.rules import default_rule_set


@pytest.fixture
def file_scanner():
    return FileScanner(LineScanner(default_rule_set()))


def test_line_numbers_are_one_based(tmp_path, file_scanner):
    path = tmp_path / "config.js"
    path.write_text('// setup\nconst x = 1;\nconst password = "hunter2XY";\n')

    findings = file_scanner.scan_file(path)

    assert [(f.line_number, f.severity) for f in findings] == [(3, Severity.HIGH)]
    assert findings[0].file_path == str(path)
    assert findings[0].line_content == 'const password = "hunter2XY";'


def test_crlf_line_endings(tmp_path, file_scanner):
    path = tmp_path / "seed.sql"
    path.write_bytes(b"-- seed\r\nINSERT INTO users VALUES ('admin@123');\r\n")

    findings = file_scanner.scan_file(path)

    assert [(f.line_number, f.matched_text) for f in findings] == [(2, "admin@123")]
    assert findings[0].line_content.endswith("');")


def test_only_newlines_break_lines(tmp_path, file_scanner):
    path = tmp_path / "strings.js"
    path.write_text('const s = "a\u2028b";\n\x0c\nconst v = "\x0b\x85";\nconst password = "hunter2XY";\n', encoding="utf-8")

    findings = file_scanner.scan_file(path)

    assert [f.line_number for f in findings] == [4]


def test_findings_follow_line_order(tmp_path, file_scanner):
    path = tmp_path / "multi.ts"
    path.write_text("test123\nclean\nqueuepal123\n")

    assert [f.line_number for f in file_scanner.scan_file(path)] == [1, 3]


def test_empty_file(tmp_path, file_scanner):
    path = tmp_path / "empty.txt"
    path.write_text("")

    assert file_scanner.scan_file(path) == []


def test_undecodable_file_is_skipped_with_warning(tmp_path, file_scanner, caplog):
    path = tmp_path / "logo.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe admin@123")

    with caplog.at_level(logging.WARNING, logger="leakguard"):
        assert file_scanner.try_scan_file(path) is None
        assert file_scanner.scan_file(path) == []

    assert "Could not read" in caplog.text
    assert "logo.png" in caplog.text


def test_unreadable_file_is_skipped_with_warning(tmp_path, file_scanner, caplog):
    with caplog.at_level(logging.WARNING, logger="leakguard"):
        assert file_scanner.try_scan_file(tmp_path / "vanished.js") is None

    assert "vanished.js" in caplog.text


def test_directory_is_absorbed_silently(tmp_path, file_scanner, caplog):
    directory = tmp_path / "looks_like_a_file.js"
    directory.mkdir()

    with caplog.at_level(logging.DEBUG, logger="leakguard"):
        assert file_scanner.try_scan_file(directory) == []

    assert caplog.records == []
