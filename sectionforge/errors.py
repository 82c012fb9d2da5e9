"""Error taxonomy shared by the scraper, the generator and the HTTP layer.

Every error carries the HTTP status it maps to; ``create_app`` turns any
:class:`SectionForgeError` into a ``{"error": message}`` JSON body.
"""

from __future__ import annotations


class SectionForgeError(Exception):
    """Base class for every failure surfaced to a caller."""

    status_code: int = 500


class ValidationError(SectionForgeError):
    """A required request field is missing or has an unusable value."""

    status_code = 400


class Unauthorized(SectionForgeError):
    """The access-control check rejected the request."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ExtractionFailed(SectionForgeError):
    """Browser launch, navigation or in-page evaluation failed.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Failed to extract sections from {url}: {cause}")
        self.url = url
        self.__cause__ = cause


class MissingCredential(SectionForgeError):
    """The alternate provider was selected and no API key could be resolved."""


class GenerationFailed(SectionForgeError):
    """A provider call (or its credential resolution) failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to generate component: {cause}")
        self.__cause__ = cause
