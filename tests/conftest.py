"""Shared test fixtures for langtranslator tests."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from langtranslator.backends.dummy import DummyClient
from langtranslator.backends.google import GoogleTranslateClient
from langtranslator.pipeline import Translator

ENDPOINT = "https://translate.example.test/translate_a/single"


def make_payload(*segments: str, detected: str | None = "en") -> str:
    """Build a translate_a/single response body with one entry per segment."""
    return json.dumps([
        [[seg, "orig", None, None, 1] for seg in segments],
        None,
        detected,
    ])


def make_google_client(handler: Callable[[httpx.Request], httpx.Response]) -> GoogleTranslateClient:
    """A GoogleTranslateClient whose requests are answered by handler."""
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return GoogleTranslateClient(ENDPOINT, http_client=http)


@pytest.fixture
def dummy_client() -> DummyClient:
    return DummyClient()


@pytest.fixture
def translator(dummy_client: DummyClient) -> Translator:
    return Translator(dummy_client)


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Path for a throwaway settings file, with environment overrides cleared."""
    for name in ("LANGTRANSLATOR_ENDPOINT", "LANGTRANSLATOR_TIMEOUT", "LANGTRANSLATOR_MAX_CHUNK_SIZE"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "settings.json"
