"""Batch summary: issue frequency ranking and rule-based recommendations."""

from __future__ import annotations

from typing import Sequence

from ..models.result import BatchSummary, CommonIssue, ComplianceResult, Priority, Recommendation
from .scoring import PASS_THRESHOLD

TOP_ISSUES = 5


def find_common_issues(
    results: Sequence[ComplianceResult],
    limit: int = TOP_ISSUES,
) -> list[CommonIssue]:
    """Group identical issue strings and rank them by how often they occur.

    Percentages are relative to the number of results. Ties keep the order in
    which issues were first seen.
    """
    counts: dict[str, int] = {}
    for result in results:
        for issue in result.issues:
            counts[issue] = counts.get(issue, 0) + 1

    total = len(results)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        CommonIssue(
            issue=issue,
            count=count,
            percentage=round(count / total * 100, 1) if total else 0.0,
        )
        for issue, count in ranked[:limit]
    ]


def generate_recommendations(
    average_score: float,
    common_issues: Sequence[CommonIssue],
    failed_count: int,
    total: int,
    pass_threshold: float = PASS_THRESHOLD,
) -> list[Recommendation]:
    """Fixed-order recommendation rules; each fires independently."""
    recommendations: list[Recommendation] = []

    if average_score < pass_threshold:
        recommendations.append(Recommendation(
            priority=Priority.HIGH,
            title="Improve overall compliance",
            description=(
                f"Average score is {average_score * 100:.1f}%. "
                "Focus on addressing common issues."
            ),
        ))

    if common_issues:
        top = common_issues[0]
        recommendations.append(Recommendation(
            priority=Priority.HIGH,
            title="Address most common issue",
            description=f'"{top.issue}" affects {top.percentage:.1f}% of pages',
        ))

    if failed_count > 0:
        recommendations.append(Recommendation(
            priority=Priority.MEDIUM,
            title="Fix failing pages",
            description=f"{failed_count} out of {total} pages are failing FR-1 compliance",
        ))

    return recommendations


def summarize(
    results: Sequence[ComplianceResult],
    pass_threshold: float = PASS_THRESHOLD,
) -> BatchSummary:
    """Aggregate statistics across results. Failed fetches count as score 0."""
    if not results:
        raise ValueError("Cannot summarize an empty result list")

    total = len(results)
    passed_count = sum(1 for r in results if r.passed)
    failed_count = total - passed_count
    average = round(sum(r.overall_score for r in results) / total, 6)
    common = find_common_issues(results)

    return BatchSummary(
        total=total,
        passed_count=passed_count,
        failed_count=failed_count,
        average_score=average,
        total_issue_count=sum(len(r.issues) for r in results),
        total_warning_count=sum(len(r.warnings) for r in results),
        most_common_issues=common,
        recommendations=generate_recommendations(
            average, common, failed_count, total, pass_threshold
        ),
    )
