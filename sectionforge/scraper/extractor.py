"""Section detection: turns a rendered-DOM snapshot into :class:`ScrapedSection` s.

Everything here is a pure function of the snapshot.  The browser is only
needed to *produce* the snapshot (see :mod:`sectionforge.scraper.renderer`),
and it is the browser that serializes each candidate's markup.

Pipeline
--------
1. Discovery: semantic landmark tags first, then section-looking ``div`` s.
2. Filtering: at least 100×100 px and some text or an image.
3. Serialization: the page's cleaned outer HTML, a 200-char text preview
   and the bounding box.  The filtered order is the response order.
"""

from __future__ import annotations

from typing import Any, List

from sectionforge.scraper.models import DomElement, ScrapedSection, SectionCandidate

SEMANTIC_TAGS = frozenset({"section", "header", "footer", "main", "nav"})
SECTION_DIV_SELECTOR = 'body > div, main > div, div[class*="section"], div[id*="section"]'

# Elements the page serializes markup for; must match discover_candidates().
CANDIDATE_SELECTOR = ", ".join(sorted(SEMANTIC_TAGS)) + ", " + SECTION_DIV_SELECTOR
# Removed from the cloned candidate before its outerHTML is read.
STRIPPED_SELECTOR = "script, style, noscript, iframe"

MIN_SECTION_SIZE = 100
TEXT_PREVIEW_LIMIT = 200


# ---------------------------------------------------------------------------
# Discovery & filtering
# ---------------------------------------------------------------------------

def _looks_like_section_div(element: DomElement) -> bool:
    """Python rendition of :data:`SECTION_DIV_SELECTOR`."""
    if element.tag_name != "div":
        return False
    if element.parent is not None and element.parent.tag_name in ("body", "main"):
        return True
    return "section" in (element.get_attr("class") or "") or "section" in (
        element.get_attr("id") or ""
    )


def discover_candidates(root: DomElement) -> List[DomElement]:
    """Return candidate elements: semantic tags first, then section-like divs.

    Deduplication is by object identity only.
    """
    candidates = [el for el in root.iter_elements() if el.tag_name in SEMANTIC_TAGS]
    seen = {id(el) for el in candidates}
    for el in root.iter_elements():
        if _looks_like_section_div(el) and id(el) not in seen:
            seen.add(id(el))
            candidates.append(el)
    return candidates


def is_meaningful(element: DomElement) -> bool:
    """Size and content filter applied to every discovered candidate."""
    rect = element.rect
    if rect.height < MIN_SECTION_SIZE or rect.width < MIN_SECTION_SIZE:
        return False
    if not element.text_content().strip() and not element.has_descendant("img"):
        return False
    return True


def to_candidate(element: DomElement) -> SectionCandidate:
    """Package a surviving element.

    Raises:
        ValueError: The snapshot carries no markup for *element*, i.e. the
            page-side selector and :func:`discover_candidates` disagree.
    """
    if element.markup is None:
        raise ValueError(f"snapshot has no markup for candidate <{element.tag_name}>")
    return SectionCandidate(
        tag_name=element.tag_name,
        bounding_rect=element.rect,
        text_preview=element.text_content()[:TEXT_PREVIEW_LIMIT].strip(),
        raw_markup=element.markup,
        native_id=element.get_attr("id") or "",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_sections(snapshot: dict[str, Any]) -> List[ScrapedSection]:
    """Detect the meaningful sections of a page.

    Args:
        snapshot: The JSON value returned by
            :data:`~sectionforge.scraper.renderer.SNAPSHOT_SCRIPT`, rooted at
            the ``<html>`` element.

    Returns:
        Sections in extraction order.  Elements without an ``id`` are named
        ``section-<i>`` after their position in that order.
    """
    root = DomElement.from_snapshot(snapshot)
    survivors = [el for el in discover_candidates(root) if is_meaningful(el)]
    return [
        ScrapedSection.from_candidate(to_candidate(el), index)
        for index, el in enumerate(survivors)
    ]
