"""Provider gateway: pick a text-generation backend and resolve its API key.

Backends
--------
``default`` (Gemini)
    Google Gemini through ``langchain_google_genai``.  Model from
    ``GEMINI_MODEL``.  With no key anywhere, the gateway reports
    :data:`DEGRADED` instead of failing.

``alternate`` (OpenAI)
    OpenAI chat completions through ``langchain_openai``.  Model from
    ``OPENAI_MODEL``.  Opt-in: a missing key raises
    :class:`~sectionforge.errors.MissingCredential`.

All backends share one interface: ``complete(prompt, credential) -> str``.
Every call is a single round trip; client-side retries are disabled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from sectionforge.config import Settings
from sectionforge.errors import MissingCredential, ValidationError


class ProviderKind(str, Enum):
    DEFAULT = "default"
    ALTERNATE = "alternate"

    @classmethod
    def parse(cls, value: str | ProviderKind | None) -> ProviderKind:
        """Map a request value to a kind.  Empty means :attr:`DEFAULT`.

        The backend names ``gemini`` and ``openai`` are accepted as aliases.
        """
        if isinstance(value, ProviderKind):
            return value
        if not value:
            return cls.DEFAULT
        kind = _PROVIDER_ALIASES.get(value.strip().lower())
        if kind is None:
            raise ValidationError(
                f"Unknown provider {value!r}. Use 'default' or 'alternate'."
            )
        return kind


_PROVIDER_ALIASES = {
    "default": ProviderKind.DEFAULT,
    "gemini": ProviderKind.DEFAULT,
    "alternate": ProviderKind.ALTERNATE,
    "openai": ProviderKind.ALTERNATE,
}


def _message_text(message: Any) -> str:
    """Flatten a LangChain message's ``content`` into plain text.

    Some chat models return a list of content parts instead of a string.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class CompletionProvider(ABC):
    """A single text-generation backend."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""

    @abstractmethod
    def complete(self, prompt: str, credential: str) -> str:
        """Send *prompt* and return the full response text.  Raises on failure."""


# ---------------------------------------------------------------------------
# Gemini (default)
# ---------------------------------------------------------------------------

class GeminiProvider(CompletionProvider):
    def __init__(self, model: str) -> None:
        self.model = model

    @property
    def name(self) -> str:
        return "Gemini"

    def complete(self, prompt: str, credential: str) -> str:
        from langchain_google_genai import ChatGoogleGenerativeAI  # noqa: PLC0415

        llm = ChatGoogleGenerativeAI(
            model=self.model,
            google_api_key=credential,
            temperature=0,
            max_retries=0,
        )
        return _message_text(llm.invoke(prompt))


# ---------------------------------------------------------------------------
# OpenAI (alternate)
# ---------------------------------------------------------------------------

class OpenAIProvider(CompletionProvider):
    def __init__(self, model: str) -> None:
        self.model = model

    @property
    def name(self) -> str:
        return "OpenAI"

    def complete(self, prompt: str, credential: str) -> str:
        from langchain_core.messages import SystemMessage  # noqa: PLC0415
        from langchain_openai import ChatOpenAI  # noqa: PLC0415

        llm = ChatOpenAI(
            model=self.model,
            api_key=credential,
            temperature=0,
            max_retries=0,
        )
        return _message_text(llm.invoke([SystemMessage(content=prompt)]))


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

class Degraded:
    """Marker returned when the default provider has no usable credential."""

    def __repr__(self) -> str:
        return "DEGRADED"


DEGRADED = Degraded()


@dataclass(frozen=True)
class ResolvedProvider:
    kind: ProviderKind
    provider: CompletionProvider
    credential: str


class ProviderGateway:
    """Resolves ``(kind, caller credential)`` to a backend and runs one completion."""

    def __init__(
        self,
        settings: Settings,
        providers: Mapping[ProviderKind, CompletionProvider] | None = None,
    ) -> None:
        self._settings = settings
        if providers is None:
            providers = {
                ProviderKind.DEFAULT: GeminiProvider(settings.gemini_model),
                ProviderKind.ALTERNATE: OpenAIProvider(settings.openai_model),
            }
        self._providers = dict(providers)

    def _configured_credential(self, kind: ProviderKind) -> str:
        if kind is ProviderKind.ALTERNATE:
            return self._settings.openai_api_key
        return self._settings.gemini_api_key

    def resolve(
        self, kind: ProviderKind, credential: str | None = None
    ) -> Union[ResolvedProvider, Degraded]:
        """Pick the backend and key for *kind*.

        Precedence: the caller's *credential*, then the server's configured
        key for that provider.

        Returns:
            A :class:`ResolvedProvider`, or :data:`DEGRADED` when *kind* is
            the default provider and no key is available.

        Raises:
            MissingCredential: *kind* is the alternate provider and no key is
                available.
        """
        key = credential or self._configured_credential(kind)
        if key:
            return ResolvedProvider(kind=kind, provider=self._providers[kind], credential=key)
        if kind is ProviderKind.DEFAULT:
            return DEGRADED
        raise MissingCredential(
            "OPENAI_API_KEY is missing. Please provide it in the UI or backend .env file."
        )

    def complete(self, resolved: ResolvedProvider, prompt: str) -> str:
        """Run exactly one completion against the resolved backend."""
        return resolved.provider.complete(prompt, resolved.credential)
