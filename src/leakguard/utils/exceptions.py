"""Exception hierarchy for LeakGuard with user-facing context."""

from typing import Optional, Dict, Any


class LeakGuardError(Exception):
    """Base exception for all LeakGuard errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None
    ):
        """
        Initialize exception with context.

        Args:
            message: Error message
            details: Additional error details
            suggestion: Suggested fix for the user
        """
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format complete error message."""
        parts = [self.message]

        if self.details:
            parts.append("\nDetails:")
            for key, value in self.details.items():
                parts.append(f"  {key}: {value}")

        if self.suggestion:
            parts.append(f"\n💡 Suggestion: {self.suggestion}")

        return "\n".join(parts)


# Scan errors
class ScanError(LeakGuardError):
    """Error during scanning operation."""
    pass


class TraversalError(ScanError):
    """A directory in the scanned tree could not be listed."""
    pass


class InvalidTargetError(ScanError):
    """Invalid scan target."""
    pass


# Configuration errors
class ConfigError(LeakGuardError):
    """Configuration-related error."""
    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration value."""
    pass


class MissingConfigError(ConfigError):
    """Required configuration is missing."""
    pass


# Output errors
class OutputError(LeakGuardError):
    """Output generation error."""
    pass


class ReportError(OutputError):
    """Report generation error."""
    pass
