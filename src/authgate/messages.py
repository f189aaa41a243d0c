"""
Error translator — raw backend error text to user-facing messages.

Matching runs in strict priority order, each stage short-circuiting:
exact rule match, case-insensitive substring rule match, keyword
heuristics, bounded passthrough, generic fallback.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional, Sequence

DEFAULT_ERROR = "An unexpected error occurred"
GENERIC_FALLBACK = "Something went wrong. Please try again or contact support if the problem persists."

PASSTHROUGH_MAX_LENGTH = 100
# Markers of stack traces and exception dumps that must never reach users
INTERNAL_MARKERS = ("Exception", "Error:")

EMAIL_IN_USE = "This email address is already registered. Please use a different email or try logging in."
USERNAME_TAKEN = "This username is already taken. Please choose a different username."
BAD_CREDENTIALS = "Incorrect email or password. Please check your credentials and try again."


class ErrorRule(NamedTuple):
    match_key: str
    message: str


class Heuristic(NamedTuple):
    """Every group must have at least one keyword present in the lower-cased text."""
    groups: tuple[tuple[str, ...], ...]
    message: str

    def matches(self, lowered: str) -> bool:
        return all(any(word in lowered for word in group) for group in self.groups)


# Order is load-bearing: first match wins in both the exact and substring scans.
ERROR_RULES: tuple[ErrorRule, ...] = (
    # Authentication
    ErrorRule("Email already in use", EMAIL_IN_USE),
    ErrorRule("Username already in use", USERNAME_TAKEN),
    ErrorRule("Invalid credentials", BAD_CREDENTIALS),
    ErrorRule(
        "Please verify your email before logging in",
        "Please verify your email address before logging in. Check your inbox for the verification email.",
    ),
    ErrorRule(
        "User not found",
        "No account found with these credentials. Please check your email or register for a new account.",
    ),
    # Email verification
    ErrorRule(
        "Invalid verification token",
        "This verification link is invalid. Please request a new verification email.",
    ),
    ErrorRule("Email already verified", "Your email has already been verified. You can now log in."),
    ErrorRule(
        "Verification token expired",
        "This verification link has expired. Please request a new verification email.",
    ),
    # Generic
    ErrorRule("Not authenticated", "Your session has expired. Please log in again."),
    ErrorRule("User not authenticated", "Please log in to access this feature."),
    ErrorRule("Failed to send email", "We couldn't send the email. Please try again in a few moments."),
    ErrorRule(
        "Failed to resend verification email",
        "We couldn't resend the verification email. Please try again later.",
    ),
)

HEURISTICS: tuple[Heuristic, ...] = (
    Heuristic((("email",), ("use",)), EMAIL_IN_USE),
    Heuristic((("username",), ("use",)), USERNAME_TAKEN),
    Heuristic((("password",), ("invalid", "incorrect")), BAD_CREDENTIALS),
    Heuristic(
        (("verify",), ("email",)),
        "Please verify your email address. Check your inbox for the verification email.",
    ),
    Heuristic((("expired", "token"),), "This link has expired. Please request a new one."),
    Heuristic(
        (("network", "fetch"),),
        "Unable to connect to the server. Please check your internet connection and try again.",
    ),
)


def normalize(raw: Any) -> str:
    """Coerce any error value to a non-empty string."""
    if isinstance(raw, str):
        text = raw
    elif isinstance(raw, Mapping):
        text = raw.get("message")
    else:
        text = getattr(raw, "message", None)
        if text is None and isinstance(raw, BaseException):
            text = str(raw)
    if not isinstance(text, str) or not text:
        return DEFAULT_ERROR
    return text


class ErrorTranslator:
    def __init__(
        self,
        rules: Sequence[ErrorRule] = ERROR_RULES,
        heuristics: Sequence[Heuristic] = HEURISTICS,
    ):
        if isinstance(rules, Mapping):
            raise TypeError("rules must be an ordered sequence of ErrorRule, not a mapping")
        self._rules = tuple(rules)
        self._heuristics = tuple(heuristics)

    def classify(self, raw: Any = None) -> str:
        message = normalize(raw)

        for rule in self._rules:
            if rule.match_key == message:
                return rule.message

        lowered = message.lower()
        for rule in self._rules:
            if rule.match_key.lower() in lowered:
                return rule.message

        for heuristic in self._heuristics:
            if heuristic.matches(lowered):
                return heuristic.message

        if len(message) < PASSTHROUGH_MAX_LENGTH and not any(m in message for m in INTERNAL_MARKERS):
            return message

        return GENERIC_FALLBACK


_default = ErrorTranslator()


def classify(raw: Optional[Any] = None) -> str:
    """Translate a raw backend error into a message safe to show users. Never raises."""
    return _default.classify(raw)
