"""
AsyncAuthGate / AuthGate — main clients.
"""

import asyncio
from typing import Any, Callable, Optional, Union

import httpx

from authgate.auth import AuthGateway
from authgate.messages import ErrorTranslator
from authgate.models.user import LoginRequest, RegisterRequest, User
from authgate.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HttpClient
from authgate.verification import VerificationStateMachine


class AsyncAuthGate:
    """Async auth client (primary)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        translator: Optional[ErrorTranslator] = None,
    ):
        self.http = HttpClient(base_url=base_url, timeout=timeout, transport=transport)
        self.auth = AuthGateway(self.http, translator)

    def verification(self, navigate: Callable[[str], None], **kwargs: Any) -> VerificationStateMachine:
        """Build a verification flow bound to this client's gateway."""
        return VerificationStateMachine(self.auth, navigate, **kwargs)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncAuthGate":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class AuthGate:
    """Sync wrapper around AsyncAuthGate. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncAuthGate(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def auth(self) -> AuthGateway:
        return self._async.auth

    def register(self, data: Union[RegisterRequest, dict[str, Any]]) -> User:
        return self._run(self._async.auth.register(data))

    def login(self, data: Union[LoginRequest, dict[str, Any]]) -> User:
        return self._run(self._async.auth.login(data))

    def logout(self) -> None:
        self._run(self._async.auth.logout())

    def get_current_user(self) -> User:
        return self._run(self._async.auth.get_current_user())

    def verify_email(self, token: str) -> User:
        return self._run(self._async.auth.verify_email(token))

    def resend_verification(self, email: str) -> None:
        self._run(self._async.auth.resend_verification(email))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
