"""
Defines custom exceptions for the library to allow for more specific error handling.
"""

from typing import Any, Optional


class LastFmClientError(Exception):
    """Base exception for all library-specific errors."""


class ConfigurationError(LastFmClientError):
    """Raised for missing, invalid, or re-initialized client configuration."""


class TransportError(LastFmClientError):
    """
    Raised when the HTTP exchange itself fails: a network error or a non-2xx status.

    When the service answered with its JSON error envelope, the envelope's code and
    message are attached as ``error_code`` and ``error_message``.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
        error_code: Optional[int] = None,
        error_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        self.body = body
        self.cause = cause
        self.error_code = error_code
        self.error_message = error_message


class LastFmApiError(LastFmClientError):
    """Raised when a successful HTTP response carries the service's error envelope."""

    def __init__(self, code: int, message: str):
        super().__init__(f"Last.fm error {code}: {message}")
        self.code = code
        self.message = message


class DecodeError(LastFmClientError):
    """
    Raised when a response does not match the operation's response schema.

    Attributes:
        path: Dotted wire-name path of the first offending field ("<root>" for the
            payload itself).
        expectation: What the schema expected at that path.
        errors: Every violation found, as (path, expectation) pairs.
    """

    def __init__(
        self,
        path: str,
        expectation: str,
        errors: Optional[list[tuple[str, str]]] = None,
    ):
        super().__init__(f"Invalid response at '{path}': {expectation}")
        self.path = path
        self.expectation = expectation
        self.errors = errors if errors is not None else [(path, expectation)]

    @property
    def paths(self) -> list[str]:
        return [path for path, _ in self.errors]


def describe_error(error: Exception) -> dict[str, Any]:
    """Collects the diagnostic attributes of a library error for display."""
    details: dict[str, Any] = {}
    for attr in ("status", "error_code", "error_message", "code", "path"):
        value = getattr(error, attr, None)
        if value is not None:
            details[attr] = value
    return details
