"""Custom exception hierarchy for screenplay ingestion with helpful messages."""

from __future__ import annotations

from typing import Any


class ScreenplayIngestError(Exception):
    """Base exception with helpful formatting for all ingestion errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScreenplayIngestError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScreenplayIngestError):
    """Screenplay parsing errors including format and structure issues."""

    pass


class MarkupParseError(ParseError):
    """Malformed XML or HTML handed to one of the markup-based parsers."""

    pass


class UnsupportedFormatError(ScreenplayIngestError):
    """Raised when an explicit format hint names no known screenplay format."""

    def __init__(self, requested_format: str, supported: list[str] | None = None):
        """Initialize with the rejected format hint.

        Args:
            requested_format: The hint the caller passed in
            supported: Hints that would have been accepted
        """
        self.requested_format = requested_format
        details: dict[str, Any] = {"requested_format": requested_format}
        if supported:
            details["supported_formats"] = supported
        super().__init__(
            message=f"Unsupported screenplay format: {requested_format}",
            hint="Omit the format to auto-detect, or use fdx, fountain, celtx, "
            "xml or html.",
            details=details,
        )


class MarkupAccessorUnavailableError(ScreenplayIngestError):
    """Raised when no markup accessor is registered for a document kind."""

    def __init__(self, kind: str) -> None:
        """Initialize with the markup kind that could not be served.

        Args:
            kind: Markup kind requested ("xml" or "html")
        """
        self.kind = kind
        super().__init__(
            message=f"No markup accessor available for {kind} documents",
            hint="Register an accessor for this kind on the MarkupAccessorRegistry "
            "passed to ScreenplayParser.",
            details={"kind": kind},
        )


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "level": "log_level",
        "format": "log_format",
        "wpp": "words_per_page",
        "encoding": "fallback_encoding",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
