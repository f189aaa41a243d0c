"""
Integration tests for authgate — tests against a running auth service.

Requires environment variables:
  AUTHGATE_API_URL   — (optional) defaults to http://localhost:8080

Run: AUTHGATE_INTEGRATION=1 pytest tests/integration/ -v
"""

import os
import uuid

import pytest

from authgate import AsyncAuthGate, ClassifiedError
from authgate.models.verification import VerificationStatus
from authgate.transport.http import DEFAULT_BASE_URL

SKIP = not os.environ.get("AUTHGATE_INTEGRATION")
BASE_URL = os.environ.get("AUTHGATE_API_URL", DEFAULT_BASE_URL)

pytestmark = pytest.mark.skipif(SKIP, reason="AUTHGATE_INTEGRATION not set")


def make_client() -> AsyncAuthGate:
    return AsyncAuthGate(base_url=BASE_URL)


class TestSession:
    @pytest.mark.asyncio
    async def test_no_session_is_not_authenticated(self):
        async with make_client() as client:
            with pytest.raises(ClassifiedError) as exc:
                await client.auth.get_current_user()
        assert exc.value.user_message == "Your session has expired. Please log in again."

    @pytest.mark.asyncio
    async def test_wrong_password_is_classified(self):
        async with make_client() as client:
            with pytest.raises(ClassifiedError) as exc:
                await client.auth.login({"email": f"{uuid.uuid4().hex}@example.com", "password": "wrong"})
        assert "Exception" not in exc.value.user_message


class TestVerification:
    @pytest.mark.asyncio
    async def test_bogus_token_ends_in_error(self):
        async with make_client() as client:
            flow = client.verification(lambda path: None)
            state = await flow.run(uuid.uuid4().hex)
            flow.teardown()
        assert state.status is VerificationStatus.ERROR
        assert state.message
