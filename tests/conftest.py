from __future__ import annotations

import asyncio
import json
from typing import Callable

import httpx
import pytest

from core.config import ServerConfig
from core.webhook import WebhookClient


WEBHOOK_URL = "https://n8n.test/webhook/gemini-image-gen"

# "hello world" as canonical base64
VALID_IMAGE = "aGVsbG8gd29ybGQ="


class RecordingWebhook:
    """Fake n8n endpoint: answers every POST with `responder` and keeps the requests."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self, config: ServerConfig) -> WebhookClient:
        return WebhookClient.from_config(config, transport=httpx.MockTransport(self))


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(webhook_url=WEBHOOK_URL, debug=True)


@pytest.fixture
def webhook_factory():
    def _make(responder: Callable[[httpx.Request], httpx.Response]) -> RecordingWebhook:
        return RecordingWebhook(responder)

    return _make


@pytest.fixture
def json_webhook(webhook_factory):
    """Fake endpoint that always replies 200 with the given JSON body."""

    def _make(body) -> RecordingWebhook:
        return webhook_factory(lambda request: httpx.Response(200, json=body))

    return _make


async def trickle(body: bytes, delay_s: float):
    """Yield the body one byte at a time, pausing between bytes."""
    for i in range(len(body)):
        await asyncio.sleep(delay_s)
        yield body[i:i + 1]
