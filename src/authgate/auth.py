"""
Auth gateway — register, login, logout, session check and email verification.

Every non-2xx response is classified before it leaves this module. Transport
failures (httpx.TransportError) propagate unchanged, as do decode errors from a
2xx response whose body is not a User.
"""

import logging
from typing import Any, Awaitable, Optional, Union

import httpx
from pydantic import BaseModel

from authgate.errors import ClassifiedError
from authgate.messages import ErrorTranslator
from authgate.models.user import LoginRequest, RegisterRequest, User
from authgate.transport.http import HttpClient, HttpFailure

logger = logging.getLogger(__name__)

REGISTER_PATH = "/api/auth/register"
LOGIN_PATH = "/api/auth/login"
LOGOUT_PATH = "/api/auth/logout"
ME_PATH = "/api/auth/me"
VERIFY_EMAIL_PATH = "/api/auth/verify-email"
RESEND_VERIFICATION_PATH = "/api/auth/resend-verification"

Payload = Union[BaseModel, dict[str, Any]]


def _as_body(data: Payload) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_none=True)
    return dict(data)


class AuthGateway:
    def __init__(self, http: HttpClient, translator: Optional[ErrorTranslator] = None):
        self._http = http
        self._translator = translator or ErrorTranslator()

    def _classified(self, op: str, failure: HttpFailure, default: str, read_body: bool) -> ClassifiedError:
        logger.warning("%s failed with HTTP %s", op, failure.status_code)
        raw = (failure.body if read_body else "") or default
        return ClassifiedError(self._translator.classify(raw), failure.status_code)

    async def _call(self, op: str, request: Awaitable[httpx.Response], default: str, read_body: bool = True) -> httpx.Response:
        try:
            return await request
        except HttpFailure as e:
            # The failure holds the raw response body; keep it out of the traceback
            raise self._classified(op, e, default, read_body) from None
        except httpx.TransportError as e:
            logger.debug("%s could not reach the auth service: %r", op, e)
            raise

    async def register(self, data: Union[RegisterRequest, dict[str, Any]]) -> User:
        """Create an account. The server sets the session cookie on success."""
        resp = await self._call(
            "register", self._http.post(REGISTER_PATH, _as_body(data)), "Registration failed",
        )
        return User.model_validate(resp.json())

    async def login(self, data: Union[LoginRequest, dict[str, Any]]) -> User:
        resp = await self._call("login", self._http.post(LOGIN_PATH, _as_body(data)), "Login failed")
        return User.model_validate(resp.json())

    async def logout(self) -> None:
        # Response body is intentionally not read on failure
        await self._call("logout", self._http.post(LOGOUT_PATH), "Logout failed", read_body=False)

    async def get_current_user(self) -> User:
        """Session check. Failure always reads as "Not authenticated", body ignored."""
        resp = await self._call("get_current_user", self._http.get(ME_PATH), "Not authenticated", read_body=False)
        return User.model_validate(resp.json())

    async def verify_email(self, token: str) -> User:
        resp = await self._call(
            "verify_email",
            self._http.post(VERIFY_EMAIL_PATH, params={"token": token}),
            "Email verification failed",
        )
        return User.model_validate(resp.json())

    async def resend_verification(self, email: str) -> None:
        await self._call(
            "resend_verification",
            self._http.post(RESEND_VERIFICATION_PATH, params={"email": email}),
            "Failed to resend verification email",
        )
