import json

import httpx
import pytest
from fastapi.testclient import TestClient

from main import create_app
from src.shared.dependencies import get_api_key_provider, get_http_client

TEST_API_KEY = "sk-test-relay"


class FakeOpenAI:
    """Stands in for the OpenAI API behind an httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.reply = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def openai_upstream():
    return FakeOpenAI()


@pytest.fixture
def client(openai_upstream):
    app = create_app()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(openai_upstream))
    app.dependency_overrides[get_http_client] = lambda: http_client
    app.dependency_overrides[get_api_key_provider] = lambda: (lambda: TEST_API_KEY)
    return TestClient(app)
