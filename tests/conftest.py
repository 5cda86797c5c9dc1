# Test Fixtures
import json

import httpx
import pytest

from gitfs.config import Config
from gitfs.github_client import GitHubContentClient


@pytest.fixture
def mock_token(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_12345")


@pytest.fixture
def config(monkeypatch):
    for name in Config.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
    return Config(_env_file=None)


@pytest.fixture
def sample_listing():
    return [
        {"name": "a.ly", "path": "a.ly", "sha": "111", "size": 42, "type": "file"},
        {"name": "b.ly", "path": "b.ly", "sha": "222", "size": 7, "type": "file",
         "download_url": "https://raw.githubusercontent.com/user/repo/master/b.ly"},
    ]


class RecordingTransport:
    """Serves canned responses and keeps every request it saw."""

    def __init__(self, status: int = 200, payload=None, text: str = None):
        self.status = status
        self.payload = payload
        self.text = text
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        if self.payload is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> dict:
        return json.loads(self.last.content)


@pytest.fixture
def make_client(config):
    def _make(status: int = 200, payload=None, text: str = None, client_config: Config = None):
        transport = RecordingTransport(status, payload, text)
        http = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        return GitHubContentClient(client_config or config, http_client=http), transport
    return _make
