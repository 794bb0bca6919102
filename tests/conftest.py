import json

import httpx
import pytest
import pytest_asyncio

from gemini_relay import proxy
from gemini_relay.app import app


class FakeUpstream:
    """Stands in for the inference API and remembers every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.body: bytes = json.dumps({"status": "true", "result": "ok"}).encode()
        self.status_code = 200
        self.error: Exception | None = None

    def reply(self, payload, status_code: int = 200):
        self.body = json.dumps(payload).encode()
        self.status_code = status_code

    def reply_raw(self, body: bytes, status_code: int = 200):
        self.body = body
        self.status_code = status_code

    def fail(self, error: Exception):
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest_asyncio.fixture()
async def upstream():
    """Route the relay's outbound calls into a FakeUpstream."""
    fake = FakeUpstream()
    client = httpx.AsyncClient(
        base_url="https://api.example",
        transport=httpx.MockTransport(fake.handler),
    )
    proxy._client = client
    yield fake
    await proxy.close()


@pytest_asyncio.fixture()
async def client(upstream):
    """Async test client for the relay, served in-memory."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
