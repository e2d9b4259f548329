"""Hookshot exception hierarchy.

Delivery failures are not wrapped: transport errors surface as the
``httpx`` exceptions that caused them. The types here cover problems
raised by hookshot itself.
"""

from __future__ import annotations


class HookshotError(Exception):
    """Base exception for all Hookshot errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "hookshot_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to an API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ConfigurationError(HookshotError):
    """Configuration error.

    Raised when a client is built with missing or invalid options.

    Attributes:
        field: The offending option, when a single one can be named.
    """

    code: str = "configuration_error"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to an API-friendly dictionary."""
        error: dict[str, object] = {
            "code": self.code,
            "message": self.message,
        }
        if self.field is not None:
            error["field"] = self.field
        return {"error": error}
