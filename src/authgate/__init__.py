"""
authgate — session-cookie auth client for Python.

Credentialed REST client for the auth service, a translator from raw
backend errors to user-facing messages, and the email verification flow.
"""

from authgate.client import AuthGate, AsyncAuthGate
from authgate.auth import AuthGateway
from authgate.errors import AuthGateError, ClassifiedError
from authgate.messages import ErrorRule, ErrorTranslator, classify
from authgate.models.user import User, RegisterRequest, LoginRequest
from authgate.models.verification import VerificationState, VerificationStatus
from authgate.verification import VerificationStateMachine

__version__ = "0.1.0"
__all__ = [
    "AuthGate",
    "AsyncAuthGate",
    "AuthGateway",
    "AuthGateError",
    "ClassifiedError",
    "ErrorRule",
    "ErrorTranslator",
    "classify",
    "User",
    "RegisterRequest",
    "LoginRequest",
    "VerificationState",
    "VerificationStatus",
    "VerificationStateMachine",
]
