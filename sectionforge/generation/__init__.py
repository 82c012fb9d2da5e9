"""Component generation package: prompts, provider gateway and orchestration.

Public API::

    from sectionforge.generation import ProviderGateway, generate_component
    code = generate_component(ProviderGateway(settings), "<section>...</section>")
"""

from sectionforge.generation.generator import generate_component, refine_component
from sectionforge.generation.providers import (
    DEGRADED,
    CompletionProvider,
    ProviderGateway,
    ProviderKind,
)

__all__ = [
    "generate_component",
    "refine_component",
    "ProviderGateway",
    "ProviderKind",
    "CompletionProvider",
    "DEGRADED",
]
