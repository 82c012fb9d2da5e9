"""Scraper package: page rendering and section extraction."""

from sectionforge.scraper.extractor import extract_sections
from sectionforge.scraper.models import Rect, ScrapedSection, SectionCandidate
from sectionforge.scraper.renderer import PlaywrightRenderer, Renderer, Session
from sectionforge.scraper.scrape import scrape_sections

__all__ = [
    "extract_sections",
    "scrape_sections",
    "PlaywrightRenderer",
    "Renderer",
    "Session",
    "Rect",
    "ScrapedSection",
    "SectionCandidate",
]
