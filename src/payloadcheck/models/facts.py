"""Document facts data model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SEMANTIC_ELEMENTS = ("main", "header", "nav", "article", "section", "aside", "footer")

# (subset field, total field)
_BOUNDED_COUNTS = (
    ("h1_count", "heading_count"),
    ("accessible_navigation_count", "navigation_count"),
    ("forms_with_fieldset_count", "form_count"),
    ("labeled_form_field_count", "total_form_field_count"),
    ("images_with_alt_count", "image_count"),
)


def _empty_semantic_counts() -> dict[str, int]:
    return {tag: 0 for tag in SEMANTIC_ELEMENTS}


class DocumentFacts(BaseModel):
    """Structural and semantic signals extracted from one HTML document."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    has_doctype: bool = False
    has_lang_attribute: bool = False
    has_non_empty_title: bool = False
    has_meta_description: bool = False
    has_viewport_meta: bool = False

    semantic_element_counts: dict[str, int] = Field(default_factory=_empty_semantic_counts)
    heading_count: int = Field(default=0, ge=0)
    h1_count: int = Field(default=0, ge=0)

    navigation_count: int = Field(default=0, ge=0)
    accessible_navigation_count: int = Field(default=0, ge=0)
    navigation_link_count: int = Field(default=0, ge=0)

    form_count: int = Field(default=0, ge=0)
    forms_with_fieldset_count: int = Field(default=0, ge=0)
    total_form_field_count: int = Field(default=0, ge=0)
    labeled_form_field_count: int = Field(default=0, ge=0)

    main_text_length: int = Field(default=0, ge=0)
    word_count: int = Field(default=0, ge=0)
    meaningful_block_element_count: int = Field(default=0, ge=0)

    image_count: int = Field(default=0, ge=0)
    images_with_alt_count: int = Field(default=0, ge=0)

    agent_component_attribute_count: int = Field(default=0, ge=0)
    agent_action_attribute_count: int = Field(default=0, ge=0)
    agent_content_attribute_count: int = Field(default=0, ge=0)

    structured_data_block_count: int = Field(default=0, ge=0)
    microdata_element_count: int = Field(default=0, ge=0)
    aria_landmark_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_counts(self) -> "DocumentFacts":
        for tag, count in self.semantic_element_counts.items():
            if count < 0:
                raise ValueError(f"Negative count for <{tag}>: {count}")
        for part, total in _BOUNDED_COUNTS:
            if getattr(self, part) > getattr(self, total):
                raise ValueError(
                    f"{part} ({getattr(self, part)}) exceeds {total} ({getattr(self, total)})"
                )
        return self

    @property
    def total_semantic_element_count(self) -> int:
        return sum(self.semantic_element_counts.values())

    @property
    def agent_attribute_count(self) -> int:
        return (
            self.agent_component_attribute_count
            + self.agent_action_attribute_count
            + self.agent_content_attribute_count
        )
