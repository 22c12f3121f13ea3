"""Plain HTTP GET fetcher for the initial payload (no script execution)."""

from __future__ import annotations

import time
from typing import Optional

import httpx

from ..models.fetch import FetchResult
from .base import BaseFetcher

ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class HttpFetcher(BaseFetcher):
    name = "http"

    def __init__(
        self,
        fetch_config: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(fetch_config)
        self.transport = transport

    async def fetch_once(self, url: str) -> FetchResult:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": ACCEPT,
            "Accept-Language": "en-US,en;q=0.5",
        }
        start = time.monotonic()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=self.follow_redirects,
                headers=headers,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            return FetchResult(success=False, error="Request timeout", elapsed_ms=_elapsed(start))
        except Exception as e:
            return FetchResult(
                success=False, error=str(e) or type(e).__name__, elapsed_ms=_elapsed(start)
            )

        if not response.is_success:
            return FetchResult(
                success=False,
                status_code=response.status_code,
                headers=dict(response.headers),
                error=f"HTTP {response.status_code}: {response.reason_phrase}",
                elapsed_ms=_elapsed(start),
            )

        return FetchResult(
            success=True,
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
            elapsed_ms=_elapsed(start),
        )


def _elapsed(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
