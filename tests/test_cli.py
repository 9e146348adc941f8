"""Integration tests for the CLI using Typer's CliRunner."""

import httpx
import pytest
from typer.testing import CliRunner

from langtranslator import __version__
from langtranslator.cli import app
from tests.conftest import make_google_client, make_payload

runner = CliRunner()

TWO_SENTENCES = "This is sentence one. This is sentence two."


@pytest.fixture(autouse=True)
def isolated_settings(settings_file, monkeypatch):
    monkeypatch.setattr("langtranslator.config.DEFAULT_SETTINGS_FILE", settings_file)
    return settings_file


class TestCLITranslate:
    def test_translate_with_dummy(self):
        result = runner.invoke(app, ["translate", "Hello", "--dummy"])
        assert result.exit_code == 0
        assert "[ES] Hello" in result.output

    def test_translate_target_language(self):
        result = runner.invoke(app, ["translate", "Hello", "--to", "hi", "--dummy"])
        assert result.exit_code == 0
        assert "[HI] Hello" in result.output

    def test_translate_from_file(self, tmp_path):
        source = tmp_path / "input.txt"
        source.write_text("Hello\n\n   world", encoding="utf-8")
        result = runner.invoke(app, ["translate", "--file", str(source), "--dummy"])
        assert result.exit_code == 0
        assert "[ES] Hello world" in result.output

    def test_file_not_utf8(self, tmp_path):
        source = tmp_path / "input.txt"
        source.write_bytes(b"\xff\xfe bad")
        result = runner.invoke(app, ["translate", "--file", str(source), "--dummy"])
        assert result.exit_code == 1
        assert "Not valid UTF-8" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["translate", "--file", str(tmp_path / "nope.txt"), "--dummy"])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_no_text(self):
        result = runner.invoke(app, ["translate", "--dummy"])
        assert result.exit_code == 1

    def test_blank_text(self):
        result = runner.invoke(app, ["translate", "   ", "--dummy"])
        assert result.exit_code == 1
        assert "Input text is empty" in result.output

    def test_chunked_verbose(self):
        result = runner.invoke(app, [
            "-v", "translate", TWO_SENTENCES,
            "--dummy", "--max-chunk-size", "20",
        ])
        assert result.exit_code == 0
        assert "Chunks: 2" in result.output
        assert "[ES] This is sentence one. [ES] This is sentence two." in result.output

    def test_settings_file_default_target(self, isolated_settings):
        isolated_settings.write_text('{"default_target": "pa"}', encoding="utf-8")
        result = runner.invoke(app, ["translate", "Hello", "--dummy"])
        assert "[PA] Hello" in result.output

    def test_endpoint_failure(self, monkeypatch):
        client = make_google_client(lambda request: httpx.Response(503))
        monkeypatch.setattr("langtranslator.cli._create_client", lambda settings, use_dummy=False: client)
        result = runner.invoke(app, ["translate", "Hello"])
        assert result.exit_code == 1
        assert "Translation failed" in result.output

    def test_real_client_path(self, monkeypatch):
        client = make_google_client(lambda request: httpx.Response(200, text=make_payload("Hola")))
        monkeypatch.setattr("langtranslator.cli._create_client", lambda settings, use_dummy=False: client)
        result = runner.invoke(app, ["translate", "Hello"])
        assert result.exit_code == 0
        assert "Hola" in result.output


class TestCLIMisc:
    def test_languages(self):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0
        for name in ("English", "Spanish", "Hindi", "Punjabi"):
            assert name in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCLIShell:
    def test_translate_then_swap(self):
        result = runner.invoke(app, ["shell", "--dummy"], input="Hello\n:swap\n:quit\n")
        assert result.exit_code == 0
        assert "[ES] Hello" in result.output
        assert "[EN] [ES] Hello" in result.output

    def test_blank_line_asks_for_text(self):
        result = runner.invoke(app, ["shell", "--dummy"], input="   \n")
        assert result.exit_code == 0
        assert "Please enter text" in result.output

    def test_change_target(self):
        result = runner.invoke(app, ["shell", "--dummy"], input=":to hi\nHello\n")
        assert "[HI] Hello" in result.output

    def test_unknown_language(self):
        result = runner.invoke(app, ["shell", "--dummy"], input=":from xx\n")
        assert "Unsupported language code" in result.output

    def test_invalid_initial_language(self):
        result = runner.invoke(app, ["shell", "--dummy", "--from", "xx"])
        assert result.exit_code == 1
