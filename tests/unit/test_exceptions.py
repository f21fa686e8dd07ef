"""Unit tests for exception handling."""

import pytest

from leakguard.utils.exceptions import (
    LeakGuardError, ScanError, TraversalError, ConfigError,
    InvalidConfigError, ReportError, OutputError
)


def test_base_exception():
    """Test base exception."""
    error = LeakGuardError(
        "Test error",
        details={"key": "value"},
        suggestion="Try this fix"
    )

    message = str(error)
    assert "Test error" in message
    assert "key: value" in message
    assert "Try this fix" in message


def test_traversal_error_is_scan_error():
    error = TraversalError("Cannot list directory: /x", details={"error": "Permission denied"})

    assert isinstance(error, ScanError)
    assert isinstance(error, LeakGuardError)
    assert error.message == "Cannot list directory: /x"
    assert "Permission denied" in str(error)


def test_config_error():
    """Test config error."""
    error = InvalidConfigError(
        "Invalid workers",
        suggestion="Set max_workers >= 1"
    )

    assert isinstance(error, ConfigError)
    assert "Invalid workers" in str(error)
    assert "Set max_workers >= 1" in str(error)


def test_report_error():
    assert issubclass(ReportError, OutputError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
