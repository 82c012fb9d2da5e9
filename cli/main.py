"""SectionForge CLI: entry-point for all backend operations.

Usage:
    python cli/main.py --help

Commands:
    serve     → run the HTTP API with uvicorn
    scrape    → list the sections detected on a page
    generate  → convert a section's HTML into a React component
    refine    → regenerate a component with follow-up instructions
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from sectionforge.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from sectionforge.config import Settings
from sectionforge.errors import SectionForgeError
from sectionforge.generation import ProviderGateway, generate_component, refine_component
from sectionforge.scraper import PlaywrightRenderer, scrape_sections

app = typer.Typer(
    name="sectionforge",
    help="SectionForge backend CLI.",
    no_args_is_help=True,
)


def _read_html(file: Optional[Path], html: Optional[str], command: str) -> str:
    """Return markup from ``--file`` or ``--html`` (exactly one is required)."""
    if (file is None) == (html is None):
        typer.echo(f"[{command}] Pass exactly one of --file or --html.")
        raise typer.Exit(1)
    if file is not None:
        return file.read_text(encoding="utf-8")
    return html or ""


def _emit_code(code: str, out: Optional[Path], command: str) -> None:
    if out is None:
        typer.echo(code)
        return
    out.write_text(code + "\n", encoding="utf-8")
    typer.echo(f"[{command}] Wrote {len(code)} chars to {out}")


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: $HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (default: $PORT)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn  # noqa: PLC0415

    from sectionforge.api import create_app  # noqa: PLC0415
    from sectionforge.logging_setup import configure_logging  # noqa: PLC0415

    settings = Settings()
    configure_logging(settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    if not settings.access_control_enabled:
        typer.echo("[serve] SERVER_SECRET is not set; access control is disabled.")
    typer.echo(f"[serve] Backend server running on http://{bind_host}:{bind_port}")
    uvicorn.run(create_app(settings), host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="URL to scrape."),
    as_json: bool = typer.Option(False, "--json", help="Print the sections as JSON."),
    timeout_ms: Optional[int] = typer.Option(
        None, "--timeout-ms", help="Navigation timeout (default: $NAVIGATION_TIMEOUT_MS)."
    ),
) -> None:
    """Render a URL and list the sections detected on it."""
    settings = Settings()
    renderer = PlaywrightRenderer(headless=settings.headless)

    if not as_json:
        typer.echo(f"[scrape] Rendering {url!r} …")
    try:
        sections = scrape_sections(
            url, renderer, timeout_ms or settings.navigation_timeout_ms
        )
    except SectionForgeError as exc:
        typer.echo(f"[scrape] Error: {exc}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([s.to_dict() for s in sections], indent=2))
        return

    typer.echo(f"[scrape] Found {len(sections)} section(s).")
    for s in sections:
        r = s.rect
        typer.echo(
            f"  {s.id:<20} <{s.tag_name}>  {r.width:.0f}x{r.height:.0f} @ ({r.x:.0f}, {r.y:.0f})"
            f"  {s.text[:60]!r}"
        )


# ---------------------------------------------------------------------------
# Generate / refine
# ---------------------------------------------------------------------------
@app.command("generate")
def generate(
    file: Optional[Path] = typer.Option(None, "--file", help="File holding the section HTML."),
    html: Optional[str] = typer.Option(None, "--html", help="Section HTML as a string."),
    instructions: Optional[str] = typer.Option(None, help="Extra instructions for the model."),
    provider: str = typer.Option("default", help="Provider: default | alternate."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Override the configured API key."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the component to this file."),
) -> None:
    """Convert a section's HTML into a React + Tailwind component."""
    markup = _read_html(file, html, "generate")
    gateway = ProviderGateway(Settings())
    try:
        code = generate_component(gateway, markup, instructions, provider, api_key)
    except SectionForgeError as exc:
        typer.echo(f"[generate] Error: {exc}")
        raise typer.Exit(1)
    _emit_code(code, out, "generate")


@app.command("refine")
def refine(
    instructions: str = typer.Option(..., help="What to change in the component."),
    file: Optional[Path] = typer.Option(None, "--file", help="File holding the ORIGINAL section HTML."),
    html: Optional[str] = typer.Option(None, "--html", help="Original section HTML as a string."),
    provider: str = typer.Option("default", help="Provider: default | alternate."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Override the configured API key."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the component to this file."),
) -> None:
    """Regenerate a component from its original HTML with follow-up instructions.

    Hand edits to a previously generated component are not taken into account.
    """
    markup = _read_html(file, html, "refine")
    gateway = ProviderGateway(Settings())
    try:
        code = refine_component(gateway, markup, instructions, provider, api_key)
    except SectionForgeError as exc:
        typer.echo(f"[refine] Error: {exc}")
        raise typer.Exit(1)
    _emit_code(code, out, "refine")


if __name__ == "__main__":
    app()
