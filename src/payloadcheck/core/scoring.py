"""Score aggregation, pass/fail policy and letter grades."""

from __future__ import annotations

import math
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.result import CriterionResult
from .criteria import Criterion

DEFAULT_WEIGHTS: dict[str, float] = {
    Criterion.STRUCTURE.value: 0.2,
    Criterion.SEMANTIC.value: 0.25,
    Criterion.NAVIGATION.value: 0.2,
    Criterion.FORMS.value: 0.1,
    Criterion.CONTENT.value: 0.25,
    Criterion.AGENT_HINTS.value: 0.0,
}

PASS_THRESHOLD = 0.70

# (minimum score, grade), highest first
GRADE_BANDS: tuple[tuple[float, str], ...] = (
    (0.9, "A"),
    (0.8, "B"),
    (0.7, "C"),
    (0.5, "D"),
)


class ScoringPolicy(BaseModel):
    """Weight table and pass threshold, built once and passed to the aggregator."""

    model_config = ConfigDict(frozen=True)

    weights: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    pass_threshold: float = Field(default=PASS_THRESHOLD, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_weights(self) -> "ScoringPolicy":
        known = {c.value for c in Criterion}
        unknown = sorted(set(self.weights) - known)
        if unknown:
            raise ValueError(f"Unknown criteria in weights: {', '.join(unknown)}")
        if any(w < 0 for w in self.weights.values()):
            raise ValueError("Criterion weights must be non-negative")
        if self.weights.get(Criterion.AGENT_HINTS.value, 0.0) != 0.0:
            raise ValueError("agent-hints is informational and must carry zero weight")
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Criterion weights must sum to 1.0 (got {total})")
        return self


DEFAULT_POLICY = ScoringPolicy()


def aggregate(
    criterion_results: Mapping[str, CriterionResult],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> tuple[float, bool]:
    """Weighted sum of sub-scores, clamped to [0, 1], and the pass decision.

    Criteria missing from `criterion_results` contribute 0.
    """
    total = 0.0
    for name, weight in policy.weights.items():
        result = criterion_results.get(name)
        if result is not None:
            total += weight * result.sub_score
    overall = round(min(1.0, max(0.0, total)), 6)
    return overall, overall >= policy.pass_threshold


def grade(score: float) -> str:
    """Letter grade for an overall score."""
    for minimum, letter in GRADE_BANDS:
        if score >= minimum:
            return letter
    return "F"
