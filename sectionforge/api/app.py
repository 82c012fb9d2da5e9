"""FastAPI application factory.

Shared state
------------
``create_app`` builds the immutable :class:`~sectionforge.config.Settings`
once and stores it, the browser renderer and the provider gateway on
``app.state``.  Nothing else is shared between requests.

Routers
-------
Each router is mounted at the root and again under ``/api``:

    POST /scrape    render a URL and detect its sections
    POST /generate  turn one section's HTML into a React component
    POST /refine    regenerate with follow-up instructions

Every route requires :func:`~sectionforge.api.access.require_access`.
Errors are returned as ``{"error": "<message>"}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sectionforge import __version__
from sectionforge.config import Settings
from sectionforge.errors import SectionForgeError
from sectionforge.generation import ProviderGateway
from sectionforge.scraper import PlaywrightRenderer, Renderer

from sectionforge.api.routers import generate as generate_router
from sectionforge.api.routers import scrape as scrape_router


async def _sectionforge_error(request: Request, exc: SectionForgeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


async def _request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = [
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body') or 'body'}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "; ".join(problems)})


def create_app(
    settings: Settings | None = None,
    renderer: Renderer | None = None,
    gateway: ProviderGateway | None = None,
) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        settings: Configuration; read from the environment when omitted.
        renderer: Browser adapter; a headless :class:`PlaywrightRenderer`
            when omitted.
        gateway: Model provider gateway; built from *settings* when omitted.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="SectionForge API",
        description=(
            "Detects the sections of a live web page and converts them into "
            "React + Tailwind components with a large language model."
        ),
        version=__version__,
    )
    app.state.settings = settings
    app.state.renderer = renderer or PlaywrightRenderer(headless=settings.headless)
    app.state.gateway = gateway or ProviderGateway(settings)

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SectionForgeError, _sectionforge_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)

    for prefix in ("", "/api"):
        app.include_router(scrape_router.router, prefix=prefix, tags=["scrape"])
        app.include_router(generate_router.router, prefix=prefix, tags=["generate"])

    return app
