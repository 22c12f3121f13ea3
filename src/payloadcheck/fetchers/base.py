"""Fetch collaborator abstraction with optional retry logic.

The scoring core only ever calls `fetch()`; whether a fetcher retries is its
own policy, configured through `fetch.retry_attempts` (1 = no retry).
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, runtime_checkable

from .. import __version__
from ..models.fetch import FetchResult
from ..utils.sanitize import sanitize_error

DEFAULT_USER_AGENT = f"payloadcheck/{__version__} (Initial payload checker; no JS)"


@runtime_checkable
class Fetcher(Protocol):
    """Protocol that all fetchers must implement."""

    name: str

    async def fetch(self, url: str) -> FetchResult: ...


class BaseFetcher:
    """Base class with shared retry logic and config handling."""

    name: str = "base"

    def __init__(self, fetch_config: Optional[dict] = None):
        self.config = fetch_config or {}
        self.timeout = float(self.config.get("timeout_seconds", 10))
        if self.timeout < 0:
            raise ValueError(f"Fetch timeout must not be negative (got {self.timeout})")
        self.user_agent = self.config.get("user_agent") or DEFAULT_USER_AGENT
        self.follow_redirects = bool(self.config.get("follow_redirects", True))
        self.max_attempts = max(1, int(self.config.get("retry_attempts", 1)))
        self.retry_delay = float(self.config.get("retry_delay_seconds", 1))

    async def fetch_once(self, url: str) -> FetchResult:
        raise NotImplementedError

    async def fetch(self, url: str) -> FetchResult:
        """Wrap fetch_once() with retries for timeouts and 5xx responses."""
        last_result: Optional[FetchResult] = None

        for attempt in range(1, self.max_attempts + 1):
            result = await self.fetch_once(url)
            last_result = result

            if result.success:
                return result

            error_msg = result.error or ""
            is_retryable = (
                (result.status_code is not None and result.status_code >= 500)
                or "timeout" in error_msg.lower()
            )
            if not is_retryable or attempt >= self.max_attempts:
                return result.model_copy(update={"error": sanitize_error(error_msg)})

            await asyncio.sleep(self.retry_delay * attempt)

        return last_result or FetchResult(success=False, error="Max retries exceeded")


def get_fetcher(config: dict) -> BaseFetcher:
    """Factory function to create the configured fetcher."""
    fetch_config = dict(config.get("fetch") or {})
    fetcher_name = fetch_config.get("fetcher", "http")

    if fetcher_name == "http":
        from .http import HttpFetcher
        return HttpFetcher(fetch_config)
    else:
        raise ValueError(f"Unknown fetcher: {fetcher_name}")
