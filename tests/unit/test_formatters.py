"""Tests for formatters/."""

from __future__ import annotations

import json
from xml.etree import ElementTree as ET

import pytest

from payloadcheck.core.checker import check_html, failed_result
from payloadcheck.core.report import summarize
from payloadcheck.formatters.junit import build_junit_xml
from payloadcheck.formatters.render import FORMATS, render


@pytest.fixture
def batch(good_html: str, spa_shell_html: str):
    return [
        check_html(good_html, url="https://good.example"),
        check_html(spa_shell_html, url="https://spa.example"),
        failed_result("https://down.example", "Request timeout"),
    ]


class TestTextFormat:
    def test_single_result(self, spa_shell_html: str):
        result = check_html(spa_shell_html, url="https://spa.example")
        text = render(result, "text")
        assert text.startswith("FR-1 Analysis for https://spa.example:")
        assert "Status: FAIL" in text
        assert "Issues:" in text
        assert "  - Missing title (page title is absent or empty)" in text

    def test_passing_result_has_no_issue_section(self, good_html: str):
        text = render(check_html(good_html, url="https://good.example"))
        assert "Status: PASS" in text
        assert "Score: 100.0%" in text
        assert "Issues:" not in text

    def test_failed_fetch(self):
        text = render(failed_result("https://down.example", "Request timeout"))
        assert "Failed to load page: Request timeout" in text
        assert "Fetch:" not in text

    def test_summary(self, batch):
        text = render(summarize(batch), "text", results=batch)
        assert "FR-1 COMPLIANCE SUMMARY" in text
        assert "Total URLs: 3" in text
        assert "Passed: 1 (33.3%)" in text
        assert "Most Common Issues:" in text
        assert "[MEDIUM] Fix failing pages" in text
        assert "  FAIL (0.0%) https://down.example" in text


class TestJsonFormat:
    def test_camel_case_keys(self, good_html: str):
        data = json.loads(render(check_html(good_html, url="u"), "json"))
        assert data["url"] == "u"
        assert data["overallScore"] == 1.0
        assert data["passed"] is True
        assert "criterionResults" in data
        assert data["criterionResults"]["agent-hints"]["subScore"] >= 0.0
        assert data["documentFacts"]["hasDoctype"] is True
        assert data["documentFacts"]["semanticElementCounts"]["main"] == 1

    def test_failed_fetch(self):
        data = json.loads(render(failed_result("u", "Request timeout"), "json"))
        assert data["error"] == "Request timeout"
        assert data["documentFacts"] is None

    def test_summary_document(self, batch):
        data = json.loads(render(summarize(batch), "json", results=batch))
        assert set(data) == {"summary", "results", "timestamp"}
        assert data["summary"]["passedCount"] == 1
        assert data["summary"]["failedCount"] == 2
        assert data["summary"]["recommendations"][0]["priority"] == "high"
        assert [r["url"] for r in data["results"]] == [r.url for r in batch]


class TestJunitFormat:
    def test_passing_result(self, good_html: str):
        root = ET.fromstring(build_junit_xml([check_html(good_html, url="u")]))
        assert root.tag == "testsuites"
        # six criteria + overall
        assert root.get("tests") == "7"
        assert root.get("failures") == "0"

    def test_failing_result(self, spa_shell_html: str):
        root = ET.fromstring(build_junit_xml([check_html(spa_shell_html, url="u")]))
        names = {tc.get("name") for tc in root.iter("testcase") if tc.find("failure") is not None}
        assert "structure" in names
        assert "overall" in names
        assert "agent-hints" not in names

    def test_fetch_error(self):
        root = ET.fromstring(build_junit_xml([failed_result("u", "Request timeout")]))
        assert root.get("errors") == "1"
        error = root.find(".//error")
        assert error is not None
        assert error.text == "Request timeout"

    def test_summary_uses_results(self, batch):
        root = ET.fromstring(render(summarize(batch), "junit", results=batch))
        assert len(root.findall("testsuite")) == 3


class TestRender:
    def test_formats(self):
        assert FORMATS == ("text", "json", "junit")

    def test_unknown_format(self, good_html: str):
        with pytest.raises(ValueError, match="Unsupported format"):
            render(check_html(good_html), "html")

    def test_unknown_report_type(self):
        with pytest.raises(TypeError):
            render({"not": "a report"})  # type: ignore[arg-type]
