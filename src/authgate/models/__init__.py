from authgate.models.user import LoginRequest, RegisterRequest, User
from authgate.models.verification import VerificationState, VerificationStatus

__all__ = [
    "User",
    "RegisterRequest",
    "LoginRequest",
    "VerificationState",
    "VerificationStatus",
]
