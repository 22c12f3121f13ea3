"""Shared fixtures for payloadcheck tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from payloadcheck.models.fetch import FetchResult

LONG_PARAGRAPH = (
    "This page explains how the initial payload of a web document can be read by "
    "people and by automated agents alike. Every section is rendered on the server, "
    "so a plain HTTP request returns the full text without running any scripts. "
    "Navigation, headings and landmarks describe the structure of the page clearly."
)


class FakeFetcher:
    """In-memory fetcher: url -> FetchResult or exception, with optional delays."""

    name = "fake"

    def __init__(self, pages: dict, delays: dict | None = None):
        self.pages = pages
        self.delays = delays or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        delay = self.delays.get(url, 0)
        if delay:
            await asyncio.sleep(delay)
        page = self.pages.get(url)
        if page is None:
            return FetchResult(success=False, error=f"Unknown host for {url}")
        if isinstance(page, Exception):
            raise page
        if isinstance(page, str):
            return FetchResult(success=True, status_code=200, body=page)
        return page


@pytest.fixture
def good_html() -> str:
    """A well-structured, server-rendered page."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <title>T</title>
  <meta name="description" content="d">
  <meta name="viewport" content="width=device-width, initial-scale=1">
</head>
<body>
  <header>
    <nav role="navigation">
      <a href="/">Home</a><a href="/a">A</a><a href="/b">B</a><a href="/c">C</a>
    </nav>
  </header>
  <main>
    <h1>T</h1>
    <p>{LONG_PARAGRAPH}</p>
    <section><p>More content in a second section of the page.</p></section>
  </main>
  <footer></footer>
</body>
</html>"""


@pytest.fixture
def spa_shell_html() -> str:
    """An empty client-rendered shell."""
    return '<html><body><div id="root"></div><script src="app.js"></script></body></html>'


@pytest.fixture
def partial_form_html() -> str:
    """A form with three fields, two of them labeled."""
    return """<!DOCTYPE html>
<html lang="en">
<head><title>Contact</title></head>
<body>
  <main>
    <h1>Contact</h1>
    <form>
      <label for="name">Name</label>
      <input type="text" id="name" name="name">
      <input type="email" id="email" name="email" aria-label="Email">
      <textarea id="message" name="message"></textarea>
    </form>
  </main>
</body>
</html>"""


@pytest.fixture
def fake_fetcher_factory():
    return FakeFetcher


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "site"
    project.mkdir()
    return project


@pytest.fixture
def initialized_project(project_dir: Path) -> Path:
    """Create a project with .payloadcheck/config.yaml."""
    cc_dir = project_dir / ".payloadcheck"
    cc_dir.mkdir()
    (cc_dir / "config.yaml").write_text(
        "fetch:\n  timeout_seconds: 5\n\nscoring:\n  pass_threshold: 0.8\n",
        encoding="utf-8",
    )
    return project_dir
