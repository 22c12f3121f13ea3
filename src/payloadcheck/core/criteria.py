"""Criterion scorers.

Each criterion is a pure function from DocumentFacts to a CriterionResult.
CRITERIA holds them in report order; the aggregator iterates it.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from ..models.facts import DocumentFacts
from ..models.result import CriterionResult


class Criterion(str, Enum):
    STRUCTURE = "structure"
    SEMANTIC = "semantic"
    NAVIGATION = "navigation"
    FORMS = "forms"
    CONTENT = "content"
    AGENT_HINTS = "agent-hints"


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

SEMANTIC_MINIMUM = 2
SEMANTIC_TARGET = 4
NAV_LINK_MINIMUM = 3
LABEL_RATIO_MINIMUM = 0.8
TEXT_MINIMUM = 100
TEXT_TARGET = 300
BLOCK_MINIMUM = 3


def _score(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 6)


# ---------------------------------------------------------------------------
# Scorers
# ---------------------------------------------------------------------------

def score_structure(facts: DocumentFacts) -> CriterionResult:
    """Doctype, lang, title, meta description and viewport."""
    issues: list[str] = []
    warnings: list[str] = []

    if not facts.has_doctype:
        issues.append("Missing DOCTYPE declaration")
    if not facts.has_lang_attribute:
        issues.append("Missing lang attribute on html element")
    if not facts.has_non_empty_title:
        issues.append("Missing title (page title is absent or empty)")
    if not facts.has_meta_description:
        warnings.append("Missing meta description")
    if not facts.has_viewport_meta:
        warnings.append("Missing viewport meta tag")

    value = (
        0.2 * facts.has_doctype
        + 0.2 * facts.has_lang_attribute
        + 0.3 * facts.has_non_empty_title
        + 0.15 * facts.has_meta_description
        + 0.15 * facts.has_viewport_meta
    )
    return CriterionResult(
        name=Criterion.STRUCTURE.value, sub_score=_score(value), issues=issues, warnings=warnings
    )


def score_semantic(facts: DocumentFacts) -> CriterionResult:
    """HTML5 sectioning elements and heading outline."""
    issues: list[str] = []
    warnings: list[str] = []
    count = facts.total_semantic_element_count

    if count < SEMANTIC_MINIMUM:
        issues.append(f"Insufficient semantic HTML structure (found {count} elements)")
    elif count < SEMANTIC_TARGET:
        warnings.append(f"Limited semantic HTML structure (found {count} elements)")

    if facts.heading_count == 0:
        issues.append("No headings found - content structure unclear")
    elif facts.h1_count == 0:
        issues.append("No h1 heading found")
    elif facts.h1_count > 1:
        warnings.append(f"Multiple h1 headings found ({facts.h1_count})")

    return CriterionResult(
        name=Criterion.SEMANTIC.value,
        sub_score=_score(count / SEMANTIC_TARGET),
        issues=issues,
        warnings=warnings,
    )


def score_navigation(facts: DocumentFacts) -> CriterionResult:
    issues: list[str] = []
    warnings: list[str] = []

    if facts.navigation_count == 0:
        issues.append("No navigation elements found")
        return CriterionResult(name=Criterion.NAVIGATION.value, sub_score=0.0, issues=issues)

    if facts.accessible_navigation_count == 0:
        warnings.append("Navigation elements lack accessibility attributes")

    links = facts.navigation_link_count
    if links == 0:
        issues.append("No navigation links found")
    elif links < NAV_LINK_MINIMUM:
        warnings.append(f"Very few navigation links ({links})")

    value = (
        0.4
        + 0.3 * (facts.accessible_navigation_count > 0)
        + 0.3 * (links >= NAV_LINK_MINIMUM)
    )
    return CriterionResult(
        name=Criterion.NAVIGATION.value, sub_score=_score(value), issues=issues, warnings=warnings
    )


def score_forms(facts: DocumentFacts) -> CriterionResult:
    """Label coverage of form fields. Pages without forms score 1.0."""
    if facts.form_count == 0:
        return CriterionResult(name=Criterion.FORMS.value, sub_score=1.0)

    issues: list[str] = []
    warnings: list[str] = []
    total = facts.total_form_field_count
    labeled = facts.labeled_form_field_count

    value = 0.0
    if total > 0:
        value = labeled / total
        if value < LABEL_RATIO_MINIMUM:
            issues.append(f"Many form fields lack proper labels ({labeled}/{total} labeled)")
        elif value < 1.0:
            warnings.append(f"Some form fields lack labels ({labeled}/{total} labeled)")

    if facts.forms_with_fieldset_count < facts.form_count:
        warnings.append("Some forms lack fieldsets or proper structure")

    return CriterionResult(
        name=Criterion.FORMS.value, sub_score=_score(value), issues=issues, warnings=warnings
    )


def score_content(facts: DocumentFacts) -> CriterionResult:
    issues: list[str] = []
    warnings: list[str] = []
    length = facts.main_text_length

    if length < TEXT_MINIMUM:
        issues.append(f"Very little text content found ({length} characters)")
    elif length < TEXT_TARGET:
        warnings.append(f"Limited text content ({length} characters)")

    if facts.meaningful_block_element_count < BLOCK_MINIMUM:
        warnings.append("Limited content structure elements")

    all_alt = facts.images_with_alt_count == facts.image_count
    if not all_alt:
        issues.append(
            f"Images missing alt text ({facts.images_with_alt_count}/{facts.image_count} have alt)"
        )

    value = (
        0.4 * (length >= TEXT_MINIMUM)
        + 0.2 * (length >= TEXT_TARGET)
        + 0.2 * (facts.meaningful_block_element_count >= BLOCK_MINIMUM)
        + 0.2 * all_alt
    )
    return CriterionResult(
        name=Criterion.CONTENT.value, sub_score=_score(value), issues=issues, warnings=warnings
    )


def score_agent_hints(facts: DocumentFacts) -> CriterionResult:
    """Agent-hint attributes, structured data and ARIA landmarks.

    Informational: carries zero weight in the overall score and never raises
    issues. The sub-score is the share of the three signal groups present.
    """
    warnings: list[str] = []
    recommendations: list[str] = []

    has_agent_attrs = facts.agent_attribute_count > 0
    has_structured_data = (
        facts.structured_data_block_count > 0 or facts.microdata_element_count > 0
    )
    has_landmarks = facts.aria_landmark_count > 0

    if not has_agent_attrs:
        recommendations.append(
            "Consider adding agent-hint attributes (data-agent-*) for better agent understanding"
        )
    if not has_structured_data:
        recommendations.append(
            "Add structured data (JSON-LD or microdata) for better agent understanding"
        )
    if not has_landmarks:
        warnings.append("No ARIA landmarks found - consider adding for better accessibility")

    present = has_agent_attrs + has_structured_data + has_landmarks
    return CriterionResult(
        name=Criterion.AGENT_HINTS.value,
        sub_score=_score(present / 3),
        warnings=warnings,
        recommendations=recommendations,
    )


CRITERIA: tuple[tuple[Criterion, Callable[[DocumentFacts], CriterionResult]], ...] = (
    (Criterion.STRUCTURE, score_structure),
    (Criterion.SEMANTIC, score_semantic),
    (Criterion.NAVIGATION, score_navigation),
    (Criterion.FORMS, score_forms),
    (Criterion.CONTENT, score_content),
    (Criterion.AGENT_HINTS, score_agent_hints),
)


def score_all(facts: DocumentFacts) -> dict[str, CriterionResult]:
    """Run every criterion, keyed by criterion name in table order."""
    return {criterion.value: scorer(facts) for criterion, scorer in CRITERIA}
