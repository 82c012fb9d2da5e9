"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"url": "https://..."}    → {"sections": [...]}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from sectionforge.api.access import require_access
from sectionforge.errors import ExtractionFailed, ValidationError
from sectionforge.scraper import scrape_sections

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_access)])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeRequest(BaseModel):
    url: Optional[str] = None


class ScrapeResponse(BaseModel):
    sections: list[dict[str, Any]]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/scrape", response_model=ScrapeResponse)
def scrape_endpoint(body: ScrapeRequest, request: Request) -> dict[str, Any]:
    """Render *url* in a headless browser and return its detected sections."""
    logger.info("[SCRAPE] Request received for URL: %s", body.url)
    if not body.url:
        raise ValidationError("URL is required")

    settings = request.app.state.settings
    try:
        sections = scrape_sections(
            body.url, request.app.state.renderer, settings.navigation_timeout_ms
        )
    except ExtractionFailed:
        logger.exception("[SCRAPE] Error:")
        raise

    logger.info("[SCRAPE] Success. Found %d sections.", len(sections))
    return {"sections": [s.to_dict() for s in sections]}
