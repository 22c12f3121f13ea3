"""payloadcheck - FR-1 initial payload compliance checker.

Fetches each URL with a plain HTTP GET (no JavaScript) and scores the raw
HTML. Exits nonzero when any URL fails.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from .. import __version__


@click.group()
@click.version_option(__version__, prog_name="payloadcheck")
def payloadcheck_cli() -> None:
    """payloadcheck - Initial payload (FR-1) compliance checks."""


@payloadcheck_cli.command()
@click.argument("urls", nargs=-1)
@click.option("--urls-file", "-i", type=click.Path(exists=True, dir_okay=False), help="File with one URL per line")
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json", "junit"]))
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the report to a file")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Request timeout in seconds")
@click.option("--user-agent", type=str, help="Custom User-Agent header")
@click.option("--concurrency", "-c", type=click.IntRange(min=1), help="Parallel fetches")
@click.option("--threshold", type=click.FloatRange(0, 1), help="Pass threshold override (0-1)")
@click.option("--verbose", "-v", is_flag=True, help="Print issues and warnings per URL")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="Config YAML file")
def check(
    urls: tuple[str, ...],
    urls_file: str | None,
    output_format: str | None,
    output: str | None,
    timeout: float | None,
    user_agent: str | None,
    concurrency: int | None,
    threshold: float | None,
    verbose: bool,
    config_file: str | None,
) -> None:
    """Check one or more URLs for FR-1 compliance.

    Example: payloadcheck check https://example.com https://example.com/about -f json
    """
    from ..core.orchestrator import run_check

    if not urls and not urls_file:
        raise click.UsageError("Provide at least one URL or --urls-file")

    exit_code = asyncio.run(
        run_check(
            urls=list(urls),
            urls_file=Path(urls_file) if urls_file else None,
            output_format=output_format,
            output=Path(output) if output else None,
            timeout=timeout,
            user_agent=user_agent,
            concurrency=concurrency,
            threshold=threshold,
            verbose=verbose,
            config_file=Path(config_file) if config_file else None,
        )
    )
    sys.exit(exit_code)


@payloadcheck_cli.command()
@click.option("--path", "-p", "project", type=click.Path(exists=True, file_okay=False), default=".")
def init(project: str) -> None:
    """Write a starter .payloadcheck/config.yaml."""
    from ..core.config import initialize_project

    config_path = initialize_project(Path(project))
    click.echo(f"Initialized {config_path}")


def main() -> None:
    payloadcheck_cli()


if __name__ == "__main__":
    main()
