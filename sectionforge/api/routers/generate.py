"""Component generation endpoints.

Routes
------
POST /generate    Body: {"html", "instructions"?, "provider"?, "apiKey"?}  → {"code": "..."}
POST /refine      Body: {"html", "instructions", "provider"?, "apiKey"?}   → {"code": "..."}

``/refine`` wraps the instructions in the refinement template and sends the
same (original) section markup again.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from sectionforge.api.access import require_access
from sectionforge.errors import GenerationFailed, ValidationError
from sectionforge.generation import ProviderKind, generate_component, refine_component

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_access)])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    html: Optional[str] = None
    instructions: Optional[str] = None
    provider: Optional[str] = None
    api_key: Optional[str] = Field(default=None, alias="apiKey")


class GenerateResponse(BaseModel):
    code: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/generate", response_model=GenerateResponse)
def generate_endpoint(body: GenerationRequest, request: Request) -> dict[str, str]:
    """Convert one section's HTML into a React + Tailwind component."""
    logger.info("[GENERATE] Request received")
    if not body.html:
        raise ValidationError("HTML content is required")
    kind = ProviderKind.parse(body.provider)

    try:
        code = generate_component(
            request.app.state.gateway,
            body.html,
            body.instructions,
            provider=kind,
            credential=body.api_key,
        )
    except GenerationFailed:
        logger.exception("[GENERATE] Error:")
        raise

    logger.info("[GENERATE] Success.")
    return {"code": code}


@router.post("/refine", response_model=GenerateResponse)
def refine_endpoint(body: GenerationRequest, request: Request) -> dict[str, str]:
    """Regenerate a component from its original HTML with follow-up instructions.

    Edits made to previously generated code are not sent to the model.
    """
    logger.info("[REFINE] Request received")
    if not body.html:
        raise ValidationError("HTML content is required")
    if not body.instructions:
        raise ValidationError("Refinement instructions are required")
    kind = ProviderKind.parse(body.provider)

    try:
        code = refine_component(
            request.app.state.gateway,
            body.html,
            body.instructions,
            provider=kind,
            credential=body.api_key,
        )
    except GenerationFailed:
        logger.exception("[REFINE] Error:")
        raise

    logger.info("[REFINE] Success.")
    return {"code": code}
