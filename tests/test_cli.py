"""Tests for the top-level SectionForge CLI."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from cli.main import app
from sectionforge.errors import ExtractionFailed
from sectionforge.scraper.models import Rect, ScrapedSection

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_provider_keys(monkeypatch):
    """Keep the developer's real keys out of CLI runs."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def _hero() -> ScrapedSection:
    return ScrapedSection(
        id="hero",
        tag_name="section",
        html='<section id="hero">Welcome</section>',
        text="Welcome",
        rect=Rect(0, 0, 400, 300),
    )


class TestScrapeCommand:
    def test_lists_sections(self, monkeypatch) -> None:
        calls = []

        def fake_scrape(url, renderer, timeout_ms):
            calls.append((url, timeout_ms))
            return [_hero()]

        monkeypatch.setattr("cli.main.scrape_sections", fake_scrape)
        result = runner.invoke(app, ["scrape", "--url", "https://example.com", "--timeout-ms", "9000"])

        assert result.exit_code == 0
        assert "Found 1 section(s)" in result.stdout
        assert "hero" in result.stdout
        assert "400x300" in result.stdout
        assert calls == [("https://example.com", 9000)]

    def test_json_output(self, monkeypatch) -> None:
        monkeypatch.setattr("cli.main.scrape_sections", lambda *a: [_hero()])
        result = runner.invoke(app, ["scrape", "--url", "https://example.com", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload[0]["id"] == "hero"
        assert payload[0]["tagName"] == "section"

    def test_failure_exits_1(self, monkeypatch) -> None:
        def failing(url, renderer, timeout_ms):
            raise ExtractionFailed(url, TimeoutError("Timeout 60000ms exceeded"))

        monkeypatch.setattr("cli.main.scrape_sections", failing)
        result = runner.invoke(app, ["scrape", "--url", "https://slow.example.com"])

        assert result.exit_code == 1
        assert "[scrape] Error" in result.stdout
        assert "Timeout 60000ms exceeded" in result.stdout


class TestGenerateCommand:
    def test_degraded_without_keys(self) -> None:
        result = runner.invoke(app, ["generate", "--html", "<div>hi</div>"])
        assert result.exit_code == 0
        assert "MockComponent" in result.stdout

    def test_reads_file_and_writes_out(self, tmp_path) -> None:
        src = tmp_path / "section.html"
        src.write_text("<section>From file</section>", encoding="utf-8")
        out = tmp_path / "Component.tsx"

        result = runner.invoke(app, ["generate", "--file", str(src), "--out", str(out)])

        assert result.exit_code == 0
        assert "Wrote" in result.stdout
        assert "MockComponent" in out.read_text(encoding="utf-8")

    def test_requires_exactly_one_input(self, tmp_path) -> None:
        result = runner.invoke(app, ["generate"])
        assert result.exit_code == 1
        assert "exactly one of --file or --html" in result.stdout

    def test_alternate_without_key_fails(self) -> None:
        result = runner.invoke(app, ["generate", "--html", "<div/>", "--provider", "alternate"])
        assert result.exit_code == 1
        assert "OPENAI_API_KEY is missing" in result.stdout

    def test_passes_options_through(self, monkeypatch) -> None:
        seen = {}

        def fake_generate(gateway, html, instructions, provider, credential):
            seen.update(html=html, instructions=instructions, provider=provider, credential=credential)
            return "CODE"

        monkeypatch.setattr("cli.main.generate_component", fake_generate)
        result = runner.invoke(
            app,
            [
                "generate", "--html", "<nav/>", "--instructions", "Sticky",
                "--provider", "alternate", "--api-key", "sk-1",
            ],
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == "CODE"
        assert seen == {
            "html": "<nav/>",
            "instructions": "Sticky",
            "provider": "alternate",
            "credential": "sk-1",
        }


class TestRefineCommand:
    def test_refine_forwards_original_html(self, monkeypatch) -> None:
        seen = {}

        def fake_refine(gateway, html, instructions, provider, credential):
            seen.update(html=html, instructions=instructions)
            return "REFINED"

        monkeypatch.setattr("cli.main.refine_component", fake_refine)
        result = runner.invoke(
            app, ["refine", "--html", "<section>Original</section>", "--instructions", "Darker"]
        )

        assert result.exit_code == 0
        assert "REFINED" in result.stdout
        assert seen == {"html": "<section>Original</section>", "instructions": "Darker"}

    def test_refine_requires_instructions(self) -> None:
        result = runner.invoke(app, ["refine", "--html", "<div/>"])
        assert result.exit_code != 0
