"""
Credentialed REST transport for the auth service.

Session cookies set by the server are kept in the client's cookie jar and
sent back on every request. No Authorization header is ever attached.
"""

from typing import Any, Optional

import httpx

from authgate.errors import AuthGateError

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "authgate/0.1.0"


class HttpFailure(AuthGateError):
    """A non-2xx response. Never leaves AuthGateway unclassified."""

    def __init__(self, status_code: int, response: httpx.Response):
        super().__init__("http_error", f"HTTP {status_code}", {"status_code": status_code})
        self.status_code = status_code
        self.response = response

    @property
    def body(self) -> str:
        return self.response.text


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cookies: Optional[httpx.Cookies] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            cookies=cookies,
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _check(resp: httpx.Response) -> httpx.Response:
        if not resp.is_success:
            raise HttpFailure(resp.status_code, resp)
        return resp

    async def get(self, path: str, params: Optional[dict[str, str]] = None) -> httpx.Response:
        resp = await self._client.get(path, params=params)
        return self._check(resp)

    async def post(
        self,
        path: str,
        body: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        if body is None:
            resp = await self._client.post(path, params=params)
        else:
            resp = await self._client.post(path, json=body, params=params)
        return self._check(resp)

    async def close(self) -> None:
        await self._client.aclose()
