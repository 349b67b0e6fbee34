"""Error taxonomy shared by the calculator services."""
from __future__ import annotations


class RentCalculatorError(Exception):
    """Base class for every error surfaced by the calculator."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)
        self.message = message or self.user_message


class ValidationError(RentCalculatorError):
    """User input failed a local check; no remote call is made."""

    user_message = "Please enter a valid email address"


class RemoteError(RentCalculatorError):
    """The backend rejected the request or answered with an unexpected shape."""

    user_message = "Failed to submit email. Please try again."


class NetworkError(RentCalculatorError):
    """The HTTP call itself raised (connection refused, timeout, ...)."""

    user_message = "Network error. Please check your connection and try again."


class PersistenceError(RentCalculatorError):
    """Local store read/write failed or held malformed data. Never shown to users."""

    user_message = "Local storage unavailable."


class ExportError(RentCalculatorError):
    """Image or document generation failed."""

    user_message = "Could not generate the report. Please try again."
