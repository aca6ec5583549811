"""Shared fixtures for Merlin client tests."""

from __future__ import annotations

import json
from typing import Callable, Iterator, List

import httpx
import pytest


CREDENTIAL_VARS = ("OPENAI_API_KEY", "OPENAI_ORG_ID", "OPENAI_PROJECT_ID", "OPENAI_BASE_URL")

CHAT_COMPLETION = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "created": 0,
    "model": "gpt-4o-mini",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "hello"},
            "finish_reason": "stop",
        }
    ],
}

IMAGES_RESPONSE = {"created": 0, "data": [{"url": "https://example.com/cat.png"}]}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # The SDK itself falls back to these variables
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)


def _respond(request: httpx.Request) -> httpx.Response:
    if "/images/" in request.url.path:
        return httpx.Response(200, json=IMAGES_RESPONSE)
    return httpx.Response(200, json=CHAT_COMPLETION)


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def http_client(sent_requests: List[httpx.Request]) -> Iterator[httpx.Client]:
    def handler(request: httpx.Request) -> httpx.Response:
        sent_requests.append(request)
        return _respond(request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield client
    client.close()


@pytest.fixture
def request_json() -> Callable[[httpx.Request], dict]:
    def _load(request: httpx.Request) -> dict:
        return json.loads(request.content)

    return _load
