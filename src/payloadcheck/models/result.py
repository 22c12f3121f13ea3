"""Compliance result and batch summary data models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .facts import DocumentFacts


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class CriterionResult(_Model):
    name: str
    sub_score: float = Field(ge=0.0, le=1.0)
    issues: list[str] = []
    warnings: list[str] = []
    recommendations: list[str] = []


class ComplianceResult(_Model):
    """Scored outcome for one URL. A failed fetch carries `error` and no facts."""

    url: str
    timestamp: str
    fetch_latency_ms: int = 0
    status_code: Optional[int] = None
    document_facts: Optional[DocumentFacts] = None
    criterion_results: dict[str, CriterionResult] = {}
    overall_score: float = Field(default=0.0, ge=0.0, le=1.0)
    passed: bool = False
    grade: str = "F"
    issues: list[str] = []
    warnings: list[str] = []
    recommendations: list[str] = []
    error: Optional[str] = None


class CommonIssue(_Model):
    issue: str
    count: int
    percentage: float


class Recommendation(_Model):
    priority: Priority
    title: str
    description: str


class BatchSummary(_Model):
    total: int = 0
    passed_count: int = 0
    failed_count: int = 0
    average_score: float = 0.0
    total_issue_count: int = 0
    total_warning_count: int = 0
    most_common_issues: list[CommonIssue] = []
    recommendations: list[Recommendation] = []
