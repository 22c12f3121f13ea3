"""Signal extraction: raw HTML to DocumentFacts.

Parses permissively with BeautifulSoup's html.parser and collects the fixed
set of structural, semantic and agent-hint signals the criteria score.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from ..models.facts import SEMANTIC_ELEMENTS, DocumentFacts

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

FORM_FIELD_TAGS = ["input", "select", "textarea"]

MEANINGFUL_BLOCK_TAGS = ["p", "li", "td", "article", "section"]

HIDDEN_TEXT_TAGS = ["script", "style", "template"]

# Without a <body> tag html.parser keeps everything at the top level
HEAD_TEXT_TAGS = ["head", "title"]

LANDMARK_ROLES = {"banner", "navigation", "main", "contentinfo", "complementary"}

AGENT_COMPONENT_ATTR = "data-agent-component"
AGENT_ACTION_ATTR = "data-agent-action"
AGENT_CONTENT_ATTR = "data-agent-content"

_DOCTYPE_RE = re.compile(r"^\s*<!doctype", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _has_doctype(html: str, soup: BeautifulSoup) -> bool:
    if _DOCTYPE_RE.match(html[:1000]):
        return True
    return any(isinstance(item, Doctype) for item in soup.contents)


def _meta_by_name(soup: BeautifulSoup, name: str) -> Optional[Tag]:
    for meta in soup.find_all("meta"):
        if (meta.get("name") or "").strip().lower() == name:
            return meta
    return None


def _has_aria_label(tag: Tag) -> bool:
    return tag.has_attr("aria-label") or tag.has_attr("aria-labelledby")


def _is_labeled(field: Tag, label_targets: set[str]) -> bool:
    field_id = (field.get("id") or "").strip()
    return bool(field_id and field_id in label_targets) or _has_aria_label(field)


def _unique(tags) -> list[Tag]:
    """Deduplicate tags by identity, keeping document order."""
    seen: set[int] = set()
    result: list[Tag] = []
    for tag in tags:
        if id(tag) not in seen:
            seen.add(id(tag))
            result.append(tag)
    return result


def visible_text(node: Tag, skip: Sequence[str] = HIDDEN_TEXT_TAGS) -> str:
    """Text content of `node` without script/style blocks, whitespace collapsed."""
    skip = list(skip)
    parts: list[str] = []
    for string in node.find_all(string=True):
        if isinstance(string, PreformattedString):
            continue
        if string.find_parent(skip) is not None:
            continue
        parts.append(str(string))
    return " ".join("".join(parts).split())


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract(html: str) -> DocumentFacts:
    """Extract DocumentFacts from raw HTML. Never raises on malformed markup."""
    html = (html or "").replace("\ufeff", "")
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup:
        return DocumentFacts()

    # Document structure
    html_tag = soup.find("html")
    title = soup.find("title")
    description = _meta_by_name(soup, "description")

    # Semantic elements and headings
    semantic_counts = {tag: len(soup.find_all(tag)) for tag in SEMANTIC_ELEMENTS}
    headings = soup.find_all(HEADING_TAGS)

    # Navigation
    navs = soup.find_all("nav")
    accessible_navs = [n for n in navs if n.has_attr("role") or _has_aria_label(n)]
    nav_links = _unique(a for nav in navs for a in nav.find_all("a"))

    # Forms
    forms = soup.find_all("form")
    label_targets = {
        label["for"].strip()
        for label in soup.find_all("label")
        if label.get("for") and label["for"].strip()
    }
    fields = _unique(f for form in forms for f in form.find_all(FORM_FIELD_TAGS))
    labeled = [f for f in fields if _is_labeled(f, label_targets)]
    forms_with_fieldset = [
        form for form in forms
        if form.find("fieldset") is not None and form.find(FORM_FIELD_TAGS) is not None
    ]

    # Content
    container = soup.find("main") or soup.body
    if container is not None:
        text = visible_text(container)
    else:
        text = visible_text(soup, HIDDEN_TEXT_TAGS + HEAD_TEXT_TAGS)
    images = soup.find_all("img")

    # Agent hints and machine-readable data
    json_ld = [
        s for s in soup.find_all("script")
        if (s.get("type") or "").strip().lower() == "application/ld+json"
    ]
    landmarks = [
        tag for tag in soup.find_all(attrs={"role": True})
        if LANDMARK_ROLES.intersection((tag.get("role") or "").lower().split())
    ]

    return DocumentFacts(
        has_doctype=_has_doctype(html, soup),
        has_lang_attribute=html_tag is not None and html_tag.has_attr("lang"),
        has_non_empty_title=title is not None and bool(title.get_text(strip=True)),
        has_meta_description=(
            description is not None and bool((description.get("content") or "").strip())
        ),
        has_viewport_meta=_meta_by_name(soup, "viewport") is not None,
        semantic_element_counts=semantic_counts,
        heading_count=len(headings),
        h1_count=sum(1 for h in headings if h.name == "h1"),
        navigation_count=len(navs),
        accessible_navigation_count=len(accessible_navs),
        navigation_link_count=len(nav_links),
        form_count=len(forms),
        forms_with_fieldset_count=len(forms_with_fieldset),
        total_form_field_count=len(fields),
        labeled_form_field_count=len(labeled),
        main_text_length=len(text),
        word_count=len(text.split()),
        meaningful_block_element_count=len(soup.find_all(MEANINGFUL_BLOCK_TAGS)),
        image_count=len(images),
        images_with_alt_count=sum(1 for img in images if img.has_attr("alt")),
        agent_component_attribute_count=len(soup.find_all(attrs={AGENT_COMPONENT_ATTR: True})),
        agent_action_attribute_count=len(soup.find_all(attrs={AGENT_ACTION_ATTR: True})),
        agent_content_attribute_count=len(soup.find_all(attrs={AGENT_CONTENT_ATTR: True})),
        structured_data_block_count=len(json_ld),
        microdata_element_count=len(soup.find_all(attrs={"itemscope": True})),
        aria_landmark_count=len(landmarks),
    )
