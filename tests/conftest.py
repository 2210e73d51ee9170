import base64
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from gemini_relay.main import create_app
from gemini_relay.models.inference import ModelManager
from gemini_relay.utils.config import DEFAULT_MODEL, DEFAULT_STATIC_DIR, Settings


def answer(text):
    """Response shape returned by the Gemini API for a single text answer."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def wire_shape(content):
    """Render an SDK Content the way it travels to the API (base64, camelCase)."""
    parts = []
    for part in content.parts:
        if part.inline_data is not None:
            parts.append({"inlineData": {
                "data": base64.b64encode(part.inline_data.data).decode("utf-8"),
                "mimeType": part.inline_data.mime_type,
            }})
        else:
            parts.append({"text": part.text})
    return {"role": content.role, "parts": parts}


class FakeModels:
    """Stands in for `client.aio.models`; records every call."""

    def __init__(self, response=None, error=None):
        self.response = answer("ok") if response is None else response
        self.error = error
        self.calls = []

    async def generate_content(self, *, model, contents):
        self.calls.append({"model": model, "contents": [wire_shape(c) for c in contents]})
        if self.error is not None:
            raise self.error
        return self.response


class FakeGenaiClient:
    def __init__(self, response=None, error=None):
        self.models = FakeModels(response=response, error=error)
        self.aio = SimpleNamespace(models=self.models)

    @property
    def calls(self):
        return self.models.calls


@pytest.fixture
def fake_genai():
    return FakeGenaiClient()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(upload_dir):
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_model=DEFAULT_MODEL,
        upload_dir=str(upload_dir),
        static_dir=DEFAULT_STATIC_DIR,
    )


@pytest.fixture
def make_client(settings):
    def _make(genai_client):
        manager = ModelManager(genai_client, model_id=settings.gemini_model)
        return TestClient(create_app(model_manager=manager, settings=settings))
    return _make


@pytest.fixture
def client(make_client, fake_genai):
    return make_client(fake_genai)
