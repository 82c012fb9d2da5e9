"""Generation orchestrator: section markup in, component source out.

``generate_component`` makes exactly one provider call per invocation (or
none, in degraded mode).  ``refine_component`` is not a patch operation: it
re-sends the *original* section markup with a refinement instruction, so any
manual edits made to previously generated code are not visible to the model.
"""

from __future__ import annotations

import logging

from sectionforge.errors import GenerationFailed
from sectionforge.generation.prompts import (
    build_placeholder_component,
    build_prompt,
    build_refinement_instructions,
)
from sectionforge.generation.providers import DEGRADED, ProviderGateway, ProviderKind
from sectionforge.generation.sanitize import sanitize_code

logger = logging.getLogger(__name__)


def generate_component(
    gateway: ProviderGateway,
    html: str,
    instructions: str | None = None,
    provider: ProviderKind | str | None = ProviderKind.DEFAULT,
    credential: str | None = None,
) -> str:
    """Convert *html* into React + Tailwind component source.

    Args:
        gateway: Resolves the backend and credential for *provider*.
        html: Markup of the one section being converted.
        instructions: Free-text user instructions, embedded verbatim.
        provider: ``"default"`` / ``"alternate"`` (or a :class:`ProviderKind`).
        credential: Caller-supplied API key; takes precedence over the
            server's configured key.

    Returns:
        Sanitized component source, or the ``MockComponent`` placeholder when
        the default provider has no key.

    Raises:
        ValidationError: *provider* is not a known provider.
        GenerationFailed: Credential resolution or the provider call failed.
    """
    kind = ProviderKind.parse(provider)
    try:
        resolved = gateway.resolve(kind, credential)
        if resolved is DEGRADED:
            logger.warning("GEMINI_API_KEY is missing. Returning mock component.")
            return build_placeholder_component(html)

        prompt = build_prompt(html, instructions)
        logger.debug(
            "Calling %s with a %d-char prompt", resolved.provider.name, len(prompt)
        )
        text = gateway.complete(resolved, prompt)
    except Exception as exc:
        logger.error("AI Generation Error: %s", exc)
        raise GenerationFailed(exc) from exc

    return sanitize_code(text)


def refine_component(
    gateway: ProviderGateway,
    html: str,
    instructions: str,
    provider: ProviderKind | str | None = ProviderKind.DEFAULT,
    credential: str | None = None,
) -> str:
    """Regenerate the component for the original *html* with extra *instructions*."""
    return generate_component(
        gateway,
        html,
        build_refinement_instructions(instructions),
        provider=provider,
        credential=credential,
    )
