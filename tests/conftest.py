import json
from dataclasses import dataclass
from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from chat_client.main import app
from chat_client.api.deps import get_completion_client
from chat_client.chat.completion import CompletionClient
from chat_client.chat.session import ChatSession

API_URL = "https://chat.test/v1/chat/completions"


class FakeCompletionAPI:
    """Stands in for the remote endpoint and records every request it sees."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = {"choices": [{"message": {"content": "Hello from the model"}}]}

    def reply(self, content: str) -> None:
        self.status_code = 200
        self.body = {"choices": [{"message": {"content": content}}]}

    def fail(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.body = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> CompletionClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return CompletionClient(http=http, url=API_URL, api_key="unused")


@dataclass
class FakeUpload:
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.data)

    async def read(self) -> bytes:
        return self.data


@pytest.fixture
def fake_api():
    return FakeCompletionAPI()


@pytest.fixture
def make_session(fake_api):
    def _make(model: str = "gpt-4.1") -> ChatSession:
        return ChatSession(client=fake_api.client(), model=model)
    return _make


@pytest.fixture
def upload():
    def _upload(data: bytes = b"\x89PNG fake", content_type: str = "image/png",
                filename: str = "cat.png", size: Optional[int] = None) -> FakeUpload:
        return FakeUpload(filename=filename, content_type=content_type, data=data, size=size)
    return _upload


@pytest.fixture
def client(fake_api):
    # Route outbound completion calls to the fake endpoint
    app.dependency_overrides[get_completion_client] = fake_api.client
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
