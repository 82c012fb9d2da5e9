"""Scrape operation: render a URL, snapshot its DOM, extract sections."""

from __future__ import annotations

import logging
from typing import List

from sectionforge.errors import ExtractionFailed
from sectionforge.scraper.extractor import extract_sections
from sectionforge.scraper.models import ScrapedSection
from sectionforge.scraper.renderer import SNAPSHOT_SCRIPT, Renderer

logger = logging.getLogger(__name__)


def scrape_sections(url: str, renderer: Renderer, timeout_ms: int) -> List[ScrapedSection]:
    """Return the meaningful sections of the page at *url*.

    Exactly one browser session is opened and it is closed on every exit
    path before this function returns or raises.  Extraction is
    all-or-nothing: any failure (launch, navigation timeout, in-page
    evaluation, malformed snapshot) raises :class:`ExtractionFailed` with the
    original exception chained.
    """
    try:
        with renderer.open(url, timeout_ms) as session:
            snapshot = session.evaluate(SNAPSHOT_SCRIPT)
            if not isinstance(snapshot, dict) or "tag" not in snapshot:
                raise ValueError("page returned no document element")
            sections = extract_sections(snapshot)
    except Exception as exc:
        logger.error("Scraping error for %s: %s", url, exc)
        raise ExtractionFailed(url, exc) from exc

    logger.info("Found %d sections.", len(sections))
    return sections
