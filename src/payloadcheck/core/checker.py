"""Single-URL checks and the batch runner.

The scoring path (extract -> score -> aggregate) is pure; only `check_url`
and `run_batch` touch the fetch collaborator.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from ..fetchers.base import Fetcher
from ..models.result import ComplianceResult
from ..utils.sanitize import sanitize_error
from .criteria import score_all
from .extractor import extract
from .scoring import DEFAULT_POLICY, ScoringPolicy, aggregate, grade

ProgressCallback = Callable[[int, ComplianceResult], None]


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def check_html(
    html: str,
    url: str = "",
    policy: ScoringPolicy = DEFAULT_POLICY,
    fetch_latency_ms: int = 0,
    status_code: Optional[int] = None,
    timestamp: Optional[str] = None,
) -> ComplianceResult:
    """Score raw HTML without fetching anything."""
    facts = extract(html)
    criterion_results = score_all(facts)
    overall, passed = aggregate(criterion_results, policy)

    issues: list[str] = []
    warnings: list[str] = []
    recommendations: list[str] = []
    for cr in criterion_results.values():
        issues.extend(cr.issues)
        warnings.extend(cr.warnings)
        recommendations.extend(cr.recommendations)

    return ComplianceResult(
        url=url,
        timestamp=timestamp or _now(),
        fetch_latency_ms=fetch_latency_ms,
        status_code=status_code,
        document_facts=facts,
        criterion_results=criterion_results,
        overall_score=overall,
        passed=passed,
        grade=grade(overall),
        issues=issues,
        warnings=warnings,
        recommendations=recommendations,
    )


def failed_result(
    url: str,
    error: str,
    fetch_latency_ms: int = 0,
    status_code: Optional[int] = None,
) -> ComplianceResult:
    """Zero-score result for a page that could not be fetched."""
    error = sanitize_error(error) or "Unknown error"
    return ComplianceResult(
        url=url,
        timestamp=_now(),
        fetch_latency_ms=fetch_latency_ms,
        status_code=status_code,
        overall_score=0.0,
        passed=False,
        grade="F",
        issues=[f"Failed to load page: {error}"],
        error=error,
    )


async def check_url(
    url: str,
    fetcher: Fetcher,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ComplianceResult:
    """Fetch one URL and score its initial payload.

    Fetch failures of any kind become a failed result; nothing is raised.
    """
    start = time.monotonic()
    try:
        fetched = await fetcher.fetch(url)
    except Exception as e:
        latency = int((time.monotonic() - start) * 1000)
        return failed_result(url, str(e) or type(e).__name__, fetch_latency_ms=latency)
    latency = int((time.monotonic() - start) * 1000)

    if not fetched.success:
        return failed_result(
            url,
            fetched.error or f"HTTP {fetched.status_code}",
            fetch_latency_ms=latency,
            status_code=fetched.status_code,
        )

    return check_html(
        fetched.body,
        url=url,
        policy=policy,
        fetch_latency_ms=latency,
        status_code=fetched.status_code,
    )


async def run_batch(
    urls: Sequence[str],
    fetcher: Fetcher,
    policy: ScoringPolicy = DEFAULT_POLICY,
    concurrency: int = 1,
    on_result: Optional[ProgressCallback] = None,
) -> list[ComplianceResult]:
    """Check every URL. Result i always corresponds to urls[i].

    `concurrency` > 1 fetches in parallel (bounded); completion order does not
    affect the output order. `on_result(index, result)` fires as each URL
    finishes.
    """
    if isinstance(urls, str):
        raise ValueError("run_batch expects a sequence of URLs, not a single string")
    urls = list(urls)
    if not urls:
        raise ValueError("run_batch requires at least one URL")
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1 (got {concurrency})")

    if concurrency == 1:
        results: list[ComplianceResult] = []
        for i, url in enumerate(urls):
            result = await check_url(url, fetcher, policy)
            if on_result:
                on_result(i, result)
            results.append(result)
        return results

    semaphore = asyncio.Semaphore(concurrency)

    async def _one(i: int, url: str) -> ComplianceResult:
        async with semaphore:
            result = await check_url(url, fetcher, policy)
        if on_result:
            on_result(i, result)
        return result

    return list(await asyncio.gather(*(_one(i, url) for i, url in enumerate(urls))))


def check_url_sync(
    url: str,
    fetcher: Fetcher,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ComplianceResult:
    return asyncio.run(check_url(url, fetcher, policy))


def run_batch_sync(
    urls: Sequence[str],
    fetcher: Fetcher,
    policy: ScoringPolicy = DEFAULT_POLICY,
    concurrency: int = 1,
) -> list[ComplianceResult]:
    return asyncio.run(run_batch(urls, fetcher, policy, concurrency))
