"""Custom exceptions for extconfig.

Provides user-friendly error messages and structured error handling.
"""

from typing import Optional, Iterable


def to_sentence(words: Iterable[str]) -> str:
    """Join words as an English list: "a", "a and b", "a, b and c"."""
    words = [str(w) for w in words]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} and {words[-1]}"


class ExtConfigError(Exception):
    """Base exception for all extconfig errors.

    Provides:
    - User-friendly message
    - Technical details for debugging
    - Suggested fixes when applicable
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        suggestion: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.details = details
        self.suggestion = suggestion
        self.cause = cause
        super().__init__(message)

    def format_user_friendly(self) -> str:
        """Format error for display to user."""
        parts = [f"Error: {self.message}"]

        if self.details:
            parts.append(f"   Details: {self.details}")

        if self.suggestion:
            parts.append(f"   Try: {self.suggestion}")

        return "\n".join(parts)

    def __str__(self) -> str:
        return self.format_user_friendly()


class ConfigError(ExtConfigError):
    """Configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        suggestion = kwargs.pop("suggestion", None)
        if not suggestion and config_key:
            suggestion = f"Check the {config_key} environment variable or your .env file"
        super().__init__(message, suggestion=suggestion, **kwargs)
        self.config_key = config_key


class MissingExtensions(ExtConfigError):
    """Raised when configured extensions are not among the available ones.

    Carries every unresolvable name, not just the first one found.
    """

    def __init__(self, names: Iterable[str], **kwargs):
        self.names = list(names)

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = (
                "Check the extension search paths and installed packages, "
                "or remove the names from the configured extension list"
            )

        super().__init__(
            f"These configured extensions have not been found: {to_sentence(self.names)}",
            suggestion=suggestion,
            **kwargs
        )


def format_exception_chain(error: Exception, max_depth: int = 5) -> str:
    """Format an exception chain for display.

    Handles nested exceptions and provides clean output.
    """
    lines = []
    current = error
    depth = 0

    while current and depth < max_depth:
        if isinstance(current, ExtConfigError):
            lines.append(current.format_user_friendly())
        else:
            lines.append(f"Error: {type(current).__name__}: {current}")

        current = getattr(current, "__cause__", None) or getattr(current, "cause", None)
        depth += 1

        if current:
            lines.append("   Caused by:")

    return "\n".join(lines)
