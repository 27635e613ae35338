# ABOUTME: Tests for the command line interface
# ABOUTME: Help output, logging status and author lookups with a stubbed service

import json

import pytest
from asyncclick.testing import CliRunner

from authorinfo.core.models import BASE_URL_PLACEHOLDER, AuthorInfo
from authorinfo.main import app


class StubService:
    """Stands in for AuthorInfoService inside the CLI."""

    result: AuthorInfo | None = None
    calls: list[tuple[str, str | None]] = []

    def __init__(self, translator=None):
        self.translator = translator
        self.closed = False

    async def get(self, author, language=None):
        StubService.calls.append((author, language))
        return StubService.result

    async def close(self):
        self.closed = True


@pytest.fixture
def stub_service(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("authorinfo.main.AuthorInfoService", StubService)
    StubService.result = AuthorInfo(
        name="Johann Sebastian Bach",
        description=f'<a href="{BASE_URL_PLACEHOLDER}?lookfor=%22composer%22&amp;type=AllFields">composer</a>',
        language="en",
        image="https://example.org/bach.jpg",
        image_caption="Bach in 1748",
    )
    StubService.calls = []
    return StubService


def test_main_function_exists():
    assert callable(app)


@pytest.mark.asyncio
async def test_main_command_help():
    runner = CliRunner()
    result = await runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "Author Info" in result.output


@pytest.mark.asyncio
async def test_main_with_logging_status(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = await runner.invoke(app, ["logging-status"])

    assert result.exit_code == 0
    assert "Logging Configuration" in result.output


class TestLookupCommand:
    @pytest.mark.asyncio
    async def test_json_output(self, stub_service):
        runner = CliRunner()
        result = await runner.invoke(app, ["--json", "lookup", "Bach", "--lang", "de", "--base-url", "/vufind/Search"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["name"] == "Johann Sebastian Bach"
        assert payload["image_caption"] == "Bach in 1748"
        assert payload["description"].startswith('<a href="/vufind/Search?lookfor=')
        assert stub_service.calls == [("Bach", "de")]

    @pytest.mark.asyncio
    async def test_legacy_output(self, stub_service):
        runner = CliRunner()
        result = await runner.invoke(app, ["--json", "lookup", "Bach", "--legacy"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["wiki_lang"] == "en"
        assert payload["altimage"] == "Bach in 1748"
        assert payload["description"].startswith('<a href="/Search/Results?lookfor=')

    @pytest.mark.asyncio
    async def test_not_found_json(self, stub_service):
        stub_service.result = None
        runner = CliRunner()
        result = await runner.invoke(app, ["--json", "lookup", "Nobody"])

        assert result.exit_code == 0
        assert result.output.strip() == "null"

    @pytest.mark.asyncio
    async def test_not_found_rich(self, stub_service):
        stub_service.result = None
        runner = CliRunner()
        result = await runner.invoke(app, ["lookup", "Nobody"])

        assert result.exit_code == 0
        assert "No author information found" in result.output

    @pytest.mark.asyncio
    async def test_rich_output(self, stub_service):
        runner = CliRunner()
        result = await runner.invoke(app, ["lookup", "Bach"])

        assert result.exit_code == 0
        assert "Author Information" in result.output
        assert "Johann Sebastian Bach" in result.output

    @pytest.mark.asyncio
    async def test_empty_author_is_not_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = await runner.invoke(app, ["--json", "--log-level", "WARNING", "lookup", ""])

        assert result.exit_code == 0
        assert result.output.strip() == "null"
