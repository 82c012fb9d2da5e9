"""Tests for the scrape operation and the Playwright renderer adapter.

Mocking strategy:
- ``scrape_sections`` runs against an in-memory ``FakeRenderer`` whose
  sessions record whether they were closed.
- ``PlaywrightRenderer`` is exercised with ``sync_playwright`` patched, so no
  browser install is needed.
"""

from __future__ import annotations

import copy
import json
from unittest.mock import MagicMock, patch

import pytest

from sectionforge.errors import ExtractionFailed
from sectionforge.scraper import scrape_sections
from sectionforge.scraper.extractor import CANDIDATE_SELECTOR, STRIPPED_SELECTOR
from sectionforge.scraper.renderer import (
    SNAPSHOT_SCRIPT,
    BrowserSession,
    PlaywrightRenderer,
    Renderer,
    Session,
)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

_HERO_SNAPSHOT = {
    "tag": "html",
    "attrs": [],
    "rect": {"x": 0, "y": 0, "width": 1280, "height": 800},
    "children": [
        {
            "tag": "body",
            "attrs": [],
            "rect": {"x": 0, "y": 0, "width": 1280, "height": 800},
            "children": [
                {
                    "tag": "section",
                    "attrs": [["id", "hero"]],
                    "rect": {"x": 0, "y": 0, "width": 400, "height": 300},
                    "children": ["Welcome"],
                    "html": '<section id="hero">Welcome</section>',
                }
            ],
        }
    ],
}


class FakeSession(Session):
    def __init__(self, snapshot=None, error: Exception | None = None) -> None:
        self.snapshot = snapshot
        self.error = error
        self.scripts: list[str] = []
        self.closed = False

    def evaluate(self, script: str):
        self.scripts.append(script)
        if self.error is not None:
            raise self.error
        return self.snapshot

    def close(self) -> None:
        self.closed = True


class FakeRenderer(Renderer):
    def __init__(self, session: FakeSession | None = None, error: Exception | None = None) -> None:
        self.session = session
        self.error = error
        self.opened: list[tuple[str, int]] = []

    def open(self, url: str, timeout_ms: int) -> Session:
        self.opened.append((url, timeout_ms))
        if self.error is not None:
            raise self.error
        return self.session


# ---------------------------------------------------------------------------
# scrape_sections
# ---------------------------------------------------------------------------

class TestScrapeSections:
    def test_returns_sections_and_closes_session(self) -> None:
        session = FakeSession(snapshot=_HERO_SNAPSHOT)
        renderer = FakeRenderer(session)

        sections = scrape_sections("https://example.com", renderer, 5000)

        assert [s.id for s in sections] == ["hero"]
        assert renderer.opened == [("https://example.com", 5000)]
        assert session.scripts == [SNAPSHOT_SCRIPT]
        assert session.closed is True

    def test_evaluation_error_wrapped_and_session_closed(self) -> None:
        boom = RuntimeError("Execution context was destroyed")
        session = FakeSession(error=boom)

        with pytest.raises(ExtractionFailed) as exc_info:
            scrape_sections("https://example.com", FakeRenderer(session), 5000)

        assert exc_info.value.__cause__ is boom
        assert "Execution context was destroyed" in str(exc_info.value)
        assert session.closed is True

    def test_open_failure_wrapped(self) -> None:
        timeout = TimeoutError("Timeout 5000ms exceeded")
        with pytest.raises(ExtractionFailed) as exc_info:
            scrape_sections("https://slow.example.com", FakeRenderer(error=timeout), 5000)
        assert exc_info.value.__cause__ is timeout
        assert exc_info.value.url == "https://slow.example.com"

    @pytest.mark.parametrize("snapshot", [None, [], {"children": []}, "html"])
    def test_malformed_snapshot_fails_whole_call(self, snapshot) -> None:
        session = FakeSession(snapshot=snapshot)
        with pytest.raises(ExtractionFailed):
            scrape_sections("https://example.com", FakeRenderer(session), 5000)
        assert session.closed is True

    def test_broken_rect_fails_whole_call(self) -> None:
        snapshot = {
            "tag": "html",
            "attrs": [],
            "rect": {"x": 0, "y": 0},
            "children": [],
        }
        with pytest.raises(ExtractionFailed):
            scrape_sections("https://example.com", FakeRenderer(FakeSession(snapshot)), 5000)


# ---------------------------------------------------------------------------
# PlaywrightRenderer
# ---------------------------------------------------------------------------

def _mock_playwright():
    """Build a ``sync_playwright()`` stand-in and return ``(factory, pw, browser, page)``."""
    page = MagicMock()
    browser = MagicMock()
    browser.new_page.return_value = page
    pw = MagicMock()
    pw.chromium.launch.return_value = browser
    factory = MagicMock()
    factory.return_value.start.return_value = pw
    return factory, pw, browser, page


class TestPlaywrightRenderer:
    def test_open_navigates_with_networkidle_and_timeout(self) -> None:
        factory, pw, browser, page = _mock_playwright()
        with patch("playwright.sync_api.sync_playwright", factory):
            session = PlaywrightRenderer(headless=True).open("https://example.com", 1234)

        pw.chromium.launch.assert_called_once_with(headless=True)
        page.goto.assert_called_once_with(
            "https://example.com", wait_until="networkidle", timeout=1234
        )
        assert isinstance(session, BrowserSession)

    def test_navigation_timeout_tears_everything_down(self) -> None:
        factory, pw, browser, page = _mock_playwright()
        page.goto.side_effect = TimeoutError("Timeout 1234ms exceeded")

        with patch("playwright.sync_api.sync_playwright", factory):
            with pytest.raises(TimeoutError):
                PlaywrightRenderer().open("https://example.com", 1234)

        browser.close.assert_called_once()
        pw.stop.assert_called_once()

    def test_launch_failure_stops_driver(self) -> None:
        factory, pw, browser, page = _mock_playwright()
        pw.chromium.launch.side_effect = RuntimeError("Executable doesn't exist")

        with patch("playwright.sync_api.sync_playwright", factory):
            with pytest.raises(RuntimeError):
                PlaywrightRenderer().open("https://example.com", 1234)

        browser.close.assert_not_called()
        pw.stop.assert_called_once()

    def test_session_evaluate_and_idempotent_close(self) -> None:
        factory, pw, browser, page = _mock_playwright()
        page.evaluate.return_value = {"tag": "html"}
        with patch("playwright.sync_api.sync_playwright", factory):
            session = PlaywrightRenderer().open("https://example.com", 1234)

        with session as s:
            assert s.evaluate(SNAPSHOT_SCRIPT) == {"tag": "html"}
        session.close()

        page.evaluate.assert_called_once_with(SNAPSHOT_SCRIPT)
        browser.close.assert_called_once()
        pw.stop.assert_called_once()

    def test_driver_stopped_even_if_browser_close_fails(self) -> None:
        pw = MagicMock()
        browser = MagicMock()
        browser.close.side_effect = RuntimeError("Target closed")
        session = BrowserSession(pw, browser, MagicMock())

        with pytest.raises(RuntimeError):
            session.close()
        pw.stop.assert_called_once()


# ---------------------------------------------------------------------------
# Page-side serialization
# ---------------------------------------------------------------------------

class TestSnapshotScript:
    def test_candidates_are_cleaned_and_serialized_in_page(self) -> None:
        assert "cloneNode(true)" in SNAPSHOT_SCRIPT
        assert "outerHTML" in SNAPSHOT_SCRIPT
        assert json.dumps(STRIPPED_SELECTOR) in SNAPSHOT_SCRIPT
        assert json.dumps(CANDIDATE_SELECTOR) in SNAPSHOT_SCRIPT
        assert "__CANDIDATES__" not in SNAPSHOT_SCRIPT
        assert "__STRIPPED__" not in SNAPSHOT_SCRIPT

    def test_candidate_selector_covers_discovery(self) -> None:
        for tag in ("section", "header", "footer", "main", "nav"):
            assert tag in CANDIDATE_SELECTOR.split(", ")
        assert 'div[class*="section"]' in CANDIDATE_SELECTOR
        assert "body > div" in CANDIDATE_SELECTOR
        assert STRIPPED_SELECTOR == "script, style, noscript, iframe"

    def test_browser_markup_returned_unchanged(self) -> None:
        markup = (
            '<section id="hero"><template><p>row</p></template>'
            "<h1>Welcome</h1></section>"
        )
        snapshot = copy.deepcopy(_HERO_SNAPSHOT)
        snapshot["children"][0]["children"][0]["html"] = markup

        factory, pw, browser, page = _mock_playwright()
        page.evaluate.return_value = snapshot
        with patch("playwright.sync_api.sync_playwright", factory):
            sections = scrape_sections("https://example.com", PlaywrightRenderer(), 1234)

        page.evaluate.assert_called_once_with(SNAPSHOT_SCRIPT)
        assert [s.html for s in sections] == [markup]
        browser.close.assert_called_once()
        pw.stop.assert_called_once()
