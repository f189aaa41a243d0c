"""
Email verification flow.

One attempt per token: VERIFYING, then SUCCESS or ERROR. On success a single
redirect is scheduled and can still be cancelled by teardown. Results of an
attempt that is no longer current are dropped.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

from authgate.auth import AuthGateway
from authgate.errors import ClassifiedError
from authgate.models.verification import VerificationState, VerificationStatus

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "Invalid verification link. No token provided."
SUCCESS_MESSAGE = "Email verified successfully!"
FAILURE_FALLBACK = "Verification failed. The link may be expired or invalid."

DEFAULT_REDIRECT_DELAY_S = 3.0
DEFAULT_REDIRECT_PATH = "/"
DEFAULT_LOGIN_PATH = "/login"


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class LoopScheduler:
    """Schedules on the running asyncio loop. asyncio.TimerHandle is the Cancellable."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        return asyncio.get_running_loop().call_later(delay, callback)


class VerificationStateMachine:
    def __init__(
        self,
        gateway: AuthGateway,
        navigate: Callable[[str], None],
        *,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[[VerificationState], None]] = None,
        on_teardown: Optional[Callable[[], None]] = None,
        redirect_path: str = DEFAULT_REDIRECT_PATH,
        login_path: str = DEFAULT_LOGIN_PATH,
        redirect_delay: float = DEFAULT_REDIRECT_DELAY_S,
    ):
        self._gateway = gateway
        self._navigate = navigate
        self._scheduler = scheduler or LoopScheduler()
        self._on_change = on_change
        self._on_teardown = on_teardown
        self._redirect_path = redirect_path
        self._login_path = login_path
        self._redirect_delay = redirect_delay

        self._state = VerificationState()
        self._attempts = 0
        self._active: Optional[int] = None
        self._cleanup_pending = False
        self._redirect: Optional[Cancellable] = None
        # Superseded calls keep running in the background; hold references until done
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> VerificationState:
        return self._state

    @property
    def redirect_pending(self) -> bool:
        return self._redirect is not None

    def start(self, token: Optional[str]) -> Optional[asyncio.Task[None]]:
        """Begin a new attempt, superseding any previous one.

        Returns the task awaiting the network call, or None when the token is
        missing and the attempt failed locally without calling the gateway.
        """
        self._end_attempt()
        self._attempts += 1
        attempt = self._attempts
        self._active = attempt
        self._cleanup_pending = True
        self._apply(attempt, VerificationStatus.VERIFYING, "")

        if not token:
            self._apply(attempt, VerificationStatus.ERROR, NO_TOKEN_MESSAGE)
            return None

        task = asyncio.get_running_loop().create_task(self._verify(attempt, token))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def run(self, token: Optional[str]) -> VerificationState:
        """Start an attempt and wait for its outcome."""
        task = self.start(token)
        if task is not None:
            await task
        return self._state

    def teardown(self) -> None:
        """Cancel the pending redirect and drop the current attempt. Safe to call twice."""
        self._end_attempt()

    def go_to_login(self) -> None:
        self.teardown()
        self._navigate(self._login_path)

    async def _verify(self, attempt: int, token: str) -> None:
        try:
            await self._gateway.verify_email(token)
        except ClassifiedError as e:
            self._apply(attempt, VerificationStatus.ERROR, e.user_message or FAILURE_FALLBACK)
            return
        except Exception:
            logger.warning("email verification attempt %d failed", attempt, exc_info=True)
            self._apply(attempt, VerificationStatus.ERROR, FAILURE_FALLBACK)
            return

        if self._apply(attempt, VerificationStatus.SUCCESS, SUCCESS_MESSAGE):
            self._redirect = self._scheduler.call_later(self._redirect_delay, lambda: self._fire_redirect(attempt))

    def _fire_redirect(self, attempt: int) -> None:
        if attempt != self._active or self._redirect is None:
            return
        self._redirect = None
        self._navigate(self._redirect_path)

    def _apply(self, attempt: int, status: VerificationStatus, message: str) -> bool:
        if attempt != self._active:
            logger.debug("dropping %s result of superseded attempt %d", status.value, attempt)
            return False
        self._state = VerificationState(status=status, message=message)
        if self._on_change is not None:
            self._on_change(self._state)
        return True

    def _end_attempt(self) -> None:
        if self._redirect is not None:
            self._redirect.cancel()
            self._redirect = None
        self._active = None
        if self._cleanup_pending:
            self._cleanup_pending = False
            if self._on_teardown is not None:
                self._on_teardown()
