"""
authgate error types.

Only ClassifiedError crosses the gateway boundary on HTTP failures.
Transport failures are httpx's own exceptions and are not wrapped.
"""

from typing import Any, Optional


class AuthGateError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ClassifiedError(AuthGateError):
    """A backend failure already translated into a message safe to display."""

    def __init__(self, user_message: str, status_code: Optional[int] = None):
        super().__init__("classified_error", user_message)
        self.user_message = user_message
        self.status_code = status_code
