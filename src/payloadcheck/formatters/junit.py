"""JUnit XML formatter for CI/CD integration.

One testsuite per URL, one testcase per scored criterion plus an `overall`
testcase carrying the pass/fail decision.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence
from xml.dom import minidom
from xml.etree import ElementTree as ET

from ..models.result import ComplianceResult


def _add_failure(testcase: ET.Element, message: str, kind: str, details: list[str]) -> None:
    failure = ET.SubElement(testcase, "failure")
    failure.set("message", message)
    failure.set("type", kind)
    failure.text = "\n".join(details)


def build_junit_xml(
    results: Sequence[ComplianceResult],
    suite_name: str = "payloadcheck",
) -> str:
    """Render results as a pretty-printed JUnit XML document."""
    testsuites = ET.Element("testsuites")
    testsuites.set("name", suite_name)
    testsuites.set("timestamp", datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S"))

    total_tests = 0
    total_failures = 0
    total_errors = 0

    for result in results:
        testsuite = ET.SubElement(testsuites, "testsuite")
        testsuite.set("name", result.url)
        suite_tests = 0
        suite_failures = 0
        suite_errors = 0

        if result.error is not None:
            suite_tests += 1
            suite_errors += 1
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", "fetch")
            testcase.set("classname", result.url)
            error = ET.SubElement(testcase, "error")
            error.set("message", result.issues[0] if result.issues else result.error)
            error.set("type", "fetch")
            error.text = result.error
        else:
            for name, cr in result.criterion_results.items():
                suite_tests += 1
                testcase = ET.SubElement(testsuite, "testcase")
                testcase.set("name", name)
                testcase.set("classname", result.url)
                if cr.issues:
                    suite_failures += 1
                    _add_failure(
                        testcase,
                        f"[{name}] {cr.issues[0]}",
                        "issue",
                        [f"Sub-score: {cr.sub_score:.3f}"] + [f"- {i}" for i in cr.issues],
                    )

            suite_tests += 1
            overall = ET.SubElement(testsuite, "testcase")
            overall.set("name", "overall")
            overall.set("classname", result.url)
            if not result.passed:
                suite_failures += 1
                _add_failure(
                    overall,
                    f"Score {result.overall_score * 100:.1f}% below pass threshold",
                    "score",
                    [f"Grade: {result.grade}"] + [f"- {i}" for i in result.issues],
                )

        testsuite.set("tests", str(suite_tests))
        testsuite.set("failures", str(suite_failures))
        testsuite.set("errors", str(suite_errors))
        testsuite.set("skipped", "0")
        testsuite.set("time", str(round(result.fetch_latency_ms / 1000, 3)))

        total_tests += suite_tests
        total_failures += suite_failures
        total_errors += suite_errors

    testsuites.set("tests", str(total_tests))
    testsuites.set("failures", str(total_failures))
    testsuites.set("errors", str(total_errors))

    rough = ET.tostring(testsuites, encoding="unicode")
    return minidom.parseString(rough).toprettyxml(indent="  ")
