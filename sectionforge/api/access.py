"""Request-level access control.

One stateless decision per request, checked in this order:

1. No ``SERVER_SECRET`` configured                  → allow
2. Body carries a non-empty ``apiKey``               → allow
3. ``X-Api-Secret`` header equals the secret         → allow
4. Otherwise                                         → 401

Rule 2 lets any caller who brings their own model key skip the server
secret, on every protected route (``/scrape`` included, even though it never
uses the key).  Kept as-is for client compatibility; see DESIGN.md.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request

from sectionforge.config import Settings
from sectionforge.errors import Unauthorized

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Api-Secret"


@dataclass(frozen=True)
class AuthDecision:
    allowed: bool
    reason: str


def authorize(settings: Settings, api_key: Any, header_secret: str | None) -> AuthDecision:
    """Apply the access rules to one request's credentials."""
    if not settings.server_secret:
        return AuthDecision(True, "no server secret configured")
    if isinstance(api_key, str) and api_key:
        return AuthDecision(True, "caller supplied an API key")
    if header_secret is not None and hmac.compare_digest(
        header_secret.encode("utf-8"), settings.server_secret.encode("utf-8")
    ):
        return AuthDecision(True, "server secret matched")
    return AuthDecision(False, "missing or wrong server secret")


async def _body_api_key(request: Request) -> Any:
    """Return ``apiKey`` from a JSON object body, or ``None``."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("apiKey")
    return None


async def require_access(request: Request) -> AuthDecision:
    """FastAPI dependency guarding the scrape and generate routers.

    Raises:
        Unauthorized: When :func:`authorize` rejects the request.
    """
    settings: Settings = request.app.state.settings
    decision = authorize(
        settings,
        await _body_api_key(request),
        request.headers.get(SECRET_HEADER),
    )
    if not decision.allowed:
        client = request.client.host if request.client else "unknown"
        logger.warning(
            "[AUTH] Unauthorized request from %s to %s", client, request.url.path
        )
        raise Unauthorized()
    return decision
