# Role: Shared fixtures. Settings are built explicitly (never from the process environment), and both
# upstreams are replaced by fakes: a stand-in google-genai client and a patched requests.post.

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from backend.api.deps import get_gemini_factory
from backend.config import Settings
from backend.llm.gemini_client import GeminiClient
from backend.main import create_app


class FakeModels:
    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeGenaiClient:
    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.models = FakeModels(response=response, error=error)


class FakeHTTPResponse:
    def __init__(self, status_code: int, data: Any = None) -> None:
        self.status_code = status_code
        self._data = data

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._data is None:
            raise ValueError("No JSON body")
        return self._data


class FakePost:
    def __init__(self, response: FakeHTTPResponse) -> None:
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url: str, **kwargs: Any) -> FakeHTTPResponse:
        self.calls.append({"url": url, **kwargs})
        return self.response


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "app_token": "",
        "gemini_api_key": "test-gemini-key",
        "openai_api_key": "test-openai-key",
        "openai_base_url": "https://openai.test/v1",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def make_client():
    def _make(settings: Settings, genai_client: Optional[FakeGenaiClient] = None) -> TestClient:
        app = create_app(settings)
        if genai_client is not None:
            app.dependency_overrides[get_gemini_factory] = lambda: (
                lambda s: GeminiClient(s, client=genai_client)
            )
        return TestClient(app)

    return _make


@pytest.fixture
def fake_post(monkeypatch):
    def _install(status_code: int, data: Any = None) -> FakePost:
        post = FakePost(FakeHTTPResponse(status_code, data))
        monkeypatch.setattr("backend.llm.openai_client.requests.post", post)
        return post

    return _install
