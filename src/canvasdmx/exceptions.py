"""Exception hierarchy for canvasdmx.

Hard argument errors are raised synchronously. Soft faults (degenerate
geometry, sampling faults) are returned as data and never raised.
"""

from typing import List, Optional


class CanvasDmxError(Exception):
    """
    Base exception for all canvasdmx errors.

    Attributes:
        user_message: Human-friendly message for display
        technical_message: Detailed message for logging
        recovery_hint: Optional hint for how to fix the issue
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """Get complete error message with recovery hint."""
        msg = self.user_message
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg


class InvalidArgumentError(CanvasDmxError, ValueError):
    """Invalid argument passed to a mapping, layout or frame call."""


class SettingsParseError(CanvasDmxError, ValueError):
    """Malformed persisted color correction settings."""

    def __init__(self, user_message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        technical = user_message
        if line_number is not None:
            technical = f"line {line_number}: {user_message} ({line!r})"
        super().__init__(
            user_message,
            technical_message=technical,
            recovery_hint="Each line must hold one floating point number",
        )
        self.line_number = line_number
        self.line = line


class ConfigError(CanvasDmxError):
    """Configuration dictionary failed schema or custom validation."""

    def __init__(self, errors: List[str]):
        super().__init__(
            f"Invalid configuration ({len(errors)} error(s))",
            technical_message="; ".join(errors),
            recovery_hint="Compare the config against ConfigValidator.get_schema()",
        )
        self.errors = list(errors)
