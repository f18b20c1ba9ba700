from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.itinerary_generator import ItineraryGenerator

ITINERARY_MD = "# Paris in 3 days\n\n## Day 1\n- **Morning:** Louvre\n"


class FakeCompletions:
    """Stands in for client.chat.completions; records every call."""

    def __init__(self, text: str | None = ITINERARY_MD, error: Exception | None = None, empty: bool = False):
        self.text = text
        self.error = error
        self.empty = empty
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.empty:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.text))])


class FakeClient:
    def __init__(self, completions: FakeCompletions):
        self.chat = SimpleNamespace(completions=completions)
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def completions() -> FakeCompletions:
    return FakeCompletions()


@pytest.fixture
def public_dir(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>AI Travel Agent</h1>")
    (root / "notes.txt").write_text("pack an umbrella\n")
    return root


@pytest.fixture
def make_client(public_dir):
    def _make(generator: ItineraryGenerator) -> TestClient:
        return TestClient(create_app(generator=generator, public_dir=public_dir))
    return _make


@pytest.fixture
def client(make_client, completions) -> TestClient:
    return make_client(ItineraryGenerator(FakeClient(completions), model="gemini-2.5-flash"))
