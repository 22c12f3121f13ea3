"""Check run orchestrator: config, fetch, score, report, exit code."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import yaml
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..fetchers.base import get_fetcher
from ..formatters.render import FORMATS, render
from ..models.result import ComplianceResult
from .checker import run_batch
from .config import build_policy, get_effective_config
from .report import summarize

console = Console(stderr=True)

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_NO_URLS = 11
EXIT_CONFIG_ERROR = 12


def load_urls_file(path: Path) -> list[str]:
    """Read one URL per line, skipping blanks, comments and non-http lines."""
    urls: list[str] = []
    for line in path.read_text(encoding="utf-8-sig").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("http"):
            urls.append(line)
    return urls


def get_exit_code(results: Sequence[ComplianceResult]) -> int:
    """Nonzero when any checked URL failed."""
    return EXIT_PASS if results and all(r.passed for r in results) else EXIT_FAIL


async def run_check(
    urls: Sequence[str],
    urls_file: Optional[Path] = None,
    output_format: Optional[str] = None,
    output: Optional[Path] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
    concurrency: Optional[int] = None,
    threshold: Optional[float] = None,
    verbose: bool = False,
    config_file: Optional[Path] = None,
    project_path: Optional[Path] = None,
) -> int:
    """Check URLs, render the report and return the process exit code."""
    all_urls = list(urls)
    if urls_file:
        all_urls.extend(load_urls_file(urls_file))

    if not all_urls:
        console.print("  [red]ERROR[/red] No URLs to check")
        return EXIT_NO_URLS

    # Load config
    cli_overrides: dict = {}
    if timeout is not None:
        cli_overrides.setdefault("fetch", {})["timeout_seconds"] = timeout
    if user_agent:
        cli_overrides.setdefault("fetch", {})["user_agent"] = user_agent
    if concurrency is not None:
        cli_overrides.setdefault("batch", {})["concurrency"] = concurrency
    if threshold is not None:
        cli_overrides.setdefault("scoring", {})["pass_threshold"] = threshold
    if output_format:
        cli_overrides.setdefault("output", {})["format"] = output_format

    try:
        config = get_effective_config(
            project_path=project_path,
            config_file=config_file,
            cli_overrides=cli_overrides or None,
        )
        policy = build_policy(config)
        fetcher = get_fetcher(config)
        fmt = (config.get("output") or {}).get("format", "text")
        batch_concurrency = int((config.get("batch") or {}).get("concurrency", 1))
    except (ValueError, TypeError, AttributeError, yaml.YAMLError) as e:
        console.print(f"  [red]ERROR[/red] Invalid configuration: {escape(str(e))}")
        return EXIT_CONFIG_ERROR

    if fmt not in FORMATS:
        console.print(f"  [red]ERROR[/red] Unsupported output format: {fmt}")
        return EXIT_CONFIG_ERROR

    console.print(f"  [bold cyan]PAYLOADCHECK[/bold cyan] v{__version__}")
    console.print(f"  URLs:    [white]{len(all_urls)}[/white]")
    console.print(f"  Pass at: [white]{policy.pass_threshold * 100:.0f}%[/white]")

    def _progress(index: int, result: ComplianceResult) -> None:
        status = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
        console.print(f"  {status} ({result.overall_score * 100:.1f}%) {escape(result.url)}")
        if verbose:
            for issue in result.issues:
                console.print(f"      [red]-[/red] {escape(issue)}")
            for warning in result.warnings:
                console.print(f"      [yellow]-[/yellow] {escape(warning)}")

    try:
        results = await run_batch(
            all_urls,
            fetcher,
            policy,
            concurrency=batch_concurrency,
            on_result=_progress,
        )
    except ValueError as e:
        console.print(f"  [red]ERROR[/red] {e}")
        return EXIT_CONFIG_ERROR

    if len(results) == 1:
        report = render(results[0], fmt)
    else:
        summary = summarize(results, pass_threshold=policy.pass_threshold)
        report = render(summary, fmt, results=results)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report + "\n", encoding="utf-8")
        console.print(f"  [green]OK[/green] Report saved to {output}")
    else:
        print(report)

    return get_exit_code(results)
