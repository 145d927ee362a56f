"""REST client for the external authentication backend.

Endpoints (JSON body ``{email, password}``):
    POST /api/signin: 2xx carries ``{token}``
    POST /api/signup: 2xx carries a success indicator
Non-2xx responses carry ``{message}``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .. import config, settings

logger = logging.getLogger("pagegen.auth.client")


class AuthClientError(Exception):
    """Raised when the auth backend cannot be reached or answers garbage."""


@dataclass
class AuthResponse:
    ok: bool
    status_code: int
    data: Dict[str, Any] = field(default_factory=dict)


class AuthClient:
    """Async client for the sign-in / sign-up endpoints.

    Args:
        base_url: Auth backend origin. Falls back to config.API_BASE_URL.
        timeout: HTTP timeout in seconds; 0 or None disables it.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._base_url = base_url or config.API_BASE_URL
        if timeout is None:
            timeout = settings.AUTH_HTTP_TIMEOUT
        self._timeout = timeout or None
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, path: str, payload: Dict[str, Any]) -> AuthResponse:
        client = await self._get_client()
        try:
            resp = await client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise AuthClientError(f"Auth backend request failed: {path}: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise AuthClientError(
                f"Auth backend returned non-JSON body ({resp.status_code}): {path}"
            ) from e
        if not isinstance(data, dict):
            data = {}

        ok = 200 <= resp.status_code < 300
        logger.info(f"POST {path} -> {resp.status_code}")
        return AuthResponse(ok=ok, status_code=resp.status_code, data=data)

    async def signin(self, email: str, password: str) -> AuthResponse:
        return await self._post("/api/signin", {"email": email, "password": password})

    async def signup(self, email: str, password: str) -> AuthResponse:
        return await self._post("/api/signup", {"email": email, "password": password})
