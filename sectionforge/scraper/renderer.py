"""Headless-browser adapter: render a URL and evaluate scripts in the page.

Playwright is imported lazily so tests that fake the renderer don't need a
browser installed.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from sectionforge.scraper.extractor import CANDIDATE_SELECTOR, STRIPPED_SELECTOR

logger = logging.getLogger(__name__)

# Serialises the rendered DOM into the JSON tree consumed by
# ``sectionforge.scraper.extractor``.  Rects are read from live layout.
# Candidates also carry ``html``: outerHTML of a clone with the stripped
# tags removed, as serialized by the browser itself.
_SNAPSHOT_TEMPLATE = """
() => {
  const candidateSelector = __CANDIDATES__;
  const strippedSelector = __STRIPPED__;
  const cleanMarkup = (el) => {
    const clone = el.cloneNode(true);
    clone.querySelectorAll(strippedSelector).forEach((e) => e.remove());
    return clone.outerHTML;
  };
  const walk = (node) => {
    if (node.nodeType === Node.TEXT_NODE || node.nodeType === Node.CDATA_SECTION_NODE) {
      return node.data;
    }
    if (node.nodeType !== Node.ELEMENT_NODE) {
      return null;
    }
    const r = node.getBoundingClientRect();
    const children = [];
    node.childNodes.forEach((child) => {
      const value = walk(child);
      if (value !== null) children.push(value);
    });
    const entry = {
      tag: node.localName,
      attrs: Array.from(node.attributes, (a) => [a.name, a.value]),
      rect: { x: r.x, y: r.y, width: r.width, height: r.height },
      children,
    };
    if (node.matches(candidateSelector)) {
      entry.html = cleanMarkup(node);
    }
    return entry;
  };
  return walk(document.documentElement);
}
"""

SNAPSHOT_SCRIPT = _SNAPSHOT_TEMPLATE.replace(
    "__CANDIDATES__", json.dumps(CANDIDATE_SELECTOR)
).replace("__STRIPPED__", json.dumps(STRIPPED_SELECTOR))


class Session(ABC):
    """A live page inside a browser; valid until :meth:`close`."""

    @abstractmethod
    def evaluate(self, script: str) -> Any:
        """Run *script* in page context and return its JSON-serializable result."""

    @abstractmethod
    def close(self) -> None:
        """Release every resource held by the session."""

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class Renderer(ABC):
    @abstractmethod
    def open(self, url: str, timeout_ms: int) -> Session:
        """Render *url* and return a live session."""


class BrowserSession(Session):
    """One Chromium browser with one navigated page."""

    def __init__(self, playwright: Any, browser: Any, page: Any) -> None:
        self._playwright = playwright
        self._browser = browser
        self._page = page
        self._closed = False

    def evaluate(self, script: str) -> Any:
        return self._page.evaluate(script)

    def close(self) -> None:
        """Close the browser and stop the Playwright driver.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            if self._browser is not None:
                self._browser.close()
        finally:
            self._playwright.stop()


class PlaywrightRenderer(Renderer):
    """Launches a fresh headless Chromium for every :meth:`open` call.

    Sessions are never pooled or shared between requests.
    """

    def __init__(self, headless: bool = True) -> None:
        self.headless = headless

    def open(self, url: str, timeout_ms: int) -> BrowserSession:
        """Launch a browser and navigate to *url*, waiting for network idle.

        Raises:
            playwright.sync_api.Error: On launch failure or navigation error.
            playwright.sync_api.TimeoutError: If navigation exceeds *timeout_ms*.
        """
        from playwright.sync_api import sync_playwright  # noqa: PLC0415

        playwright = sync_playwright().start()
        browser = None
        try:
            browser = playwright.chromium.launch(headless=self.headless)
            page = browser.new_page()
            logger.info("Navigating to %s ...", url)
            page.goto(url, wait_until="networkidle", timeout=timeout_ms)
        except BaseException:
            BrowserSession(playwright, browser, None).close()
            raise
        return BrowserSession(playwright, browser, page)
