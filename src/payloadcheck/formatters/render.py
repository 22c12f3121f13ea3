"""Format dispatch for single results and batch summaries."""

from __future__ import annotations

from typing import Optional, Sequence, Union

from ..models.result import BatchSummary, ComplianceResult
from .json_report import render_result_json, render_summary_json
from .junit import build_junit_xml
from .text import render_result_text, render_summary_text

FORMATS = ("text", "json", "junit")


def render(
    report: Union[ComplianceResult, BatchSummary],
    fmt: str = "text",
    results: Optional[Sequence[ComplianceResult]] = None,
) -> str:
    """Render a single result or a batch summary.

    `results` accompanies a summary (per-URL rows in text, the `results`
    array in JSON, the testsuites in JUnit).
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format: {fmt} (expected one of {', '.join(FORMATS)})")

    if isinstance(report, ComplianceResult):
        if fmt == "json":
            return render_result_json(report)
        if fmt == "junit":
            return build_junit_xml([report])
        return render_result_text(report)

    if isinstance(report, BatchSummary):
        if fmt == "json":
            return render_summary_json(report, results)
        if fmt == "junit":
            return build_junit_xml(results or [])
        return render_summary_text(report, results)

    raise TypeError(f"Cannot render {type(report).__name__}")
