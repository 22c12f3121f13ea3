"""Tests for core/criteria.py."""

from __future__ import annotations

import pytest

from payloadcheck.core.criteria import (
    CRITERIA,
    Criterion,
    score_agent_hints,
    score_all,
    score_content,
    score_forms,
    score_navigation,
    score_semantic,
    score_structure,
)
from payloadcheck.core.extractor import extract
from payloadcheck.models.facts import DocumentFacts


def _semantic(**counts: int) -> dict[str, int]:
    base = {tag: 0 for tag in ("header", "nav", "main", "article", "section", "aside", "footer")}
    base.update(counts)
    return base


class TestCriteriaTable:
    def test_order(self):
        assert [c.value for c, _ in CRITERIA] == [
            "structure", "semantic", "navigation", "forms", "content", "agent-hints",
        ]

    def test_score_all_keys(self):
        results = score_all(DocumentFacts())
        assert list(results) == [c.value for c in Criterion]

    def test_sub_scores_bounded(self, good_html: str, spa_shell_html: str):
        for html in (good_html, spa_shell_html, "", "<p>x</p>"):
            for result in score_all(extract(html)).values():
                assert 0.0 <= result.sub_score <= 1.0


class TestStructure:
    def test_complete(self):
        facts = DocumentFacts(
            has_doctype=True,
            has_lang_attribute=True,
            has_non_empty_title=True,
            has_meta_description=True,
            has_viewport_meta=True,
        )
        result = score_structure(facts)
        assert result.sub_score == 1.0
        assert result.issues == []
        assert result.warnings == []

    def test_empty(self):
        result = score_structure(DocumentFacts())
        assert result.sub_score == 0.0
        assert result.issues == [
            "Missing DOCTYPE declaration",
            "Missing lang attribute on html element",
            "Missing title (page title is absent or empty)",
        ]
        assert result.warnings == ["Missing meta description", "Missing viewport meta tag"]

    def test_partial_weights(self):
        facts = DocumentFacts(has_doctype=True, has_non_empty_title=True)
        assert score_structure(facts).sub_score == pytest.approx(0.5)


class TestSemantic:
    def test_target_reached(self):
        facts = DocumentFacts(
            semantic_element_counts=_semantic(header=1, nav=1, main=1, footer=1),
            heading_count=1,
            h1_count=1,
        )
        result = score_semantic(facts)
        assert result.sub_score == 1.0
        assert result.issues == []
        assert result.warnings == []

    def test_capped_at_one(self):
        facts = DocumentFacts(semantic_element_counts=_semantic(section=9), heading_count=1, h1_count=1)
        assert score_semantic(facts).sub_score == 1.0

    def test_insufficient(self):
        facts = DocumentFacts(semantic_element_counts=_semantic(main=1))
        result = score_semantic(facts)
        assert result.sub_score == pytest.approx(0.25)
        assert "Insufficient semantic HTML structure (found 1 elements)" in result.issues
        assert "No headings found - content structure unclear" in result.issues

    def test_limited(self):
        facts = DocumentFacts(semantic_element_counts=_semantic(main=1, nav=1), heading_count=2)
        result = score_semantic(facts)
        assert result.warnings == ["Limited semantic HTML structure (found 2 elements)"]
        assert result.issues == ["No h1 heading found"]

    def test_multiple_h1(self):
        facts = DocumentFacts(heading_count=3, h1_count=2)
        assert "Multiple h1 headings found (2)" in score_semantic(facts).warnings


class TestNavigation:
    def test_no_nav(self):
        result = score_navigation(DocumentFacts())
        assert result.sub_score == 0.0
        assert result.issues == ["No navigation elements found"]

    def test_full(self):
        facts = DocumentFacts(navigation_count=1, accessible_navigation_count=1, navigation_link_count=3)
        result = score_navigation(facts)
        assert result.sub_score == 1.0
        assert result.issues == []
        assert result.warnings == []

    def test_bare_nav_without_links(self):
        result = score_navigation(DocumentFacts(navigation_count=1))
        assert result.sub_score == pytest.approx(0.4)
        assert result.issues == ["No navigation links found"]
        assert result.warnings == ["Navigation elements lack accessibility attributes"]

    def test_few_links(self):
        facts = DocumentFacts(navigation_count=1, accessible_navigation_count=1, navigation_link_count=2)
        result = score_navigation(facts)
        assert result.sub_score == pytest.approx(0.7)
        assert result.warnings == ["Very few navigation links (2)"]


class TestForms:
    def test_no_forms_is_perfect(self):
        result = score_forms(DocumentFacts())
        assert result.sub_score == 1.0
        assert result.issues == []
        assert result.warnings == []

    def test_partial_labels(self, partial_form_html: str):
        result = score_forms(extract(partial_form_html))
        assert result.sub_score == pytest.approx(2 / 3, abs=1e-3)
        assert "Many form fields lack proper labels (2/3 labeled)" in result.issues
        assert "Some forms lack fieldsets or proper structure" in result.warnings

    def test_mostly_labeled_is_warning(self):
        facts = DocumentFacts(
            form_count=1,
            forms_with_fieldset_count=1,
            total_form_field_count=5,
            labeled_form_field_count=4,
        )
        result = score_forms(facts)
        assert result.sub_score == pytest.approx(0.8)
        assert result.issues == []
        assert result.warnings == ["Some form fields lack labels (4/5 labeled)"]

    def test_form_without_fields(self):
        assert score_forms(DocumentFacts(form_count=1)).sub_score == 0.0

    def test_labeling_never_lowers_score(self):
        previous = -1.0
        for labeled in range(0, 6):
            facts = DocumentFacts(
                form_count=1, total_form_field_count=5, labeled_form_field_count=labeled
            )
            score = score_forms(facts).sub_score
            assert score >= previous
            previous = score


class TestContent:
    def test_rich_content(self):
        facts = DocumentFacts(main_text_length=400, meaningful_block_element_count=3)
        result = score_content(facts)
        assert result.sub_score == 1.0
        assert result.issues == []
        assert result.warnings == []

    def test_empty_content(self):
        result = score_content(DocumentFacts())
        # no images counts as all having alt
        assert result.sub_score == pytest.approx(0.2)
        assert result.issues == ["Very little text content found (0 characters)"]
        assert result.warnings == ["Limited content structure elements"]

    def test_limited_text(self):
        facts = DocumentFacts(main_text_length=150, meaningful_block_element_count=3)
        result = score_content(facts)
        assert result.sub_score == pytest.approx(0.8)
        assert result.warnings == ["Limited text content (150 characters)"]

    def test_images_missing_alt(self):
        facts = DocumentFacts(
            main_text_length=400,
            meaningful_block_element_count=3,
            image_count=3,
            images_with_alt_count=1,
        )
        result = score_content(facts)
        assert result.sub_score == pytest.approx(0.8)
        assert result.issues == ["Images missing alt text (1/3 have alt)"]


class TestAgentHints:
    def test_nothing_present(self):
        result = score_agent_hints(DocumentFacts())
        assert result.sub_score == 0.0
        assert result.issues == []
        assert len(result.recommendations) == 2
        assert result.warnings == [
            "No ARIA landmarks found - consider adding for better accessibility"
        ]

    def test_all_present(self):
        facts = DocumentFacts(
            agent_action_attribute_count=1,
            structured_data_block_count=1,
            aria_landmark_count=2,
        )
        result = score_agent_hints(facts)
        assert result.sub_score == 1.0
        assert result.recommendations == []
        assert result.warnings == []

    def test_microdata_counts_as_structured_data(self):
        result = score_agent_hints(DocumentFacts(microdata_element_count=1))
        assert result.sub_score == pytest.approx(1 / 3, abs=1e-5)
        assert not any("structured data" in r for r in result.recommendations)
