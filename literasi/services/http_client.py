import asyncio
import logging
from typing import Any, Optional

import httpx

from config.config import settings

logger = logging.getLogger(__name__)


class ApiHTTPClient:
    """Pooled async HTTP client bound to the library backend, with retry for GETs"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.retries = max(1, settings.request_retries if retries is None else retries)
        self.backoff = settings.retry_backoff if backoff is None else backoff

        # An admin console talks to one backend; a small pool is enough
        limits = httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0
        )

        timeout = httpx.Timeout(
            timeout=settings.request_timeout,
            connect=settings.connect_timeout,
        )

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            limits=limits,
            timeout=timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """GET with exponential backoff on transport errors"""
        attempt = 0
        while True:
            try:
                return await self._client.get(path, **kwargs)
            except httpx.RequestError as e:
                attempt += 1
                if attempt >= self.retries:
                    raise
                wait_time = self.backoff * (2 ** (attempt - 1))
                logger.warning(f"GET {path} failed ({e!r}), retrying in {wait_time:.2f}s")
                await asyncio.sleep(wait_time)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._client.put(path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._client.delete(path, **kwargs)

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
