"""Plain-text report rendering."""

from __future__ import annotations

from typing import Optional, Sequence

from ..models.result import BatchSummary, ComplianceResult

RULE = "=" * 50


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _bullets(title: str, items: Sequence[str]) -> list[str]:
    if not items:
        return []
    return ["", f"{title}:"] + [f"  - {item}" for item in items]


def render_result_text(result: ComplianceResult) -> str:
    """Score, status line and bulleted issues/warnings/recommendations."""
    lines: list[str] = []
    lines.append(f"FR-1 Analysis for {result.url}:")
    lines.append(f"Score: {_pct(result.overall_score)}")
    lines.append(f"Status: {'PASS' if result.passed else 'FAIL'}")
    lines.append(f"Grade: {result.grade}")
    if result.error is None:
        lines.append(f"Fetch: {result.fetch_latency_ms} ms")

    if result.criterion_results:
        lines.append("")
        lines.append("Criteria:")
        for name, cr in result.criterion_results.items():
            lines.append(f"  {name:<12} {_pct(cr.sub_score):>7}")

    lines.extend(_bullets("Issues", result.issues))
    lines.extend(_bullets("Warnings", result.warnings))
    lines.extend(_bullets("Recommendations", result.recommendations))
    return "\n".join(lines)


def render_summary_text(
    summary: BatchSummary,
    results: Optional[Sequence[ComplianceResult]] = None,
) -> str:
    lines: list[str] = []

    if results:
        lines.append("Results:")
        for r in results:
            status = "PASS" if r.passed else "FAIL"
            lines.append(f"  {status} ({_pct(r.overall_score)}) {r.url}")
        lines.append("")

    total = summary.total or 1
    lines.append(RULE)
    lines.append("FR-1 COMPLIANCE SUMMARY")
    lines.append(RULE)
    lines.append(f"Total URLs: {summary.total}")
    lines.append(f"Passed: {summary.passed_count} ({_pct(summary.passed_count / total)})")
    lines.append(f"Failed: {summary.failed_count} ({_pct(summary.failed_count / total)})")
    lines.append(f"Average Score: {_pct(summary.average_score)}")
    lines.append(f"Total Issues: {summary.total_issue_count}")
    lines.append(f"Total Warnings: {summary.total_warning_count}")

    if summary.most_common_issues:
        lines.append("")
        lines.append("Most Common Issues:")
        for i, ci in enumerate(summary.most_common_issues, 1):
            lines.append(f"{i}. {ci.issue} ({ci.percentage:.1f}% of pages)")

    if summary.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        for i, rec in enumerate(summary.recommendations, 1):
            lines.append(f"{i}. [{rec.priority.value.upper()}] {rec.title}")
            lines.append(f"   {rec.description}")

    return "\n".join(lines)
