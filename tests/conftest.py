"""Shared fixtures: an in-memory stand-in for aiohttp.ClientSession."""

import json

import pytest


class FakeResponse:
    def __init__(self, status=200, body=b""):
        self.status = status
        if not isinstance(body, (bytes, str)):
            body = json.dumps(body)
        self._body = body.encode() if isinstance(body, str) else body

    async def read(self):
        return self._body


class _ResponseContext:
    def __init__(self, response):
        self._response = response

    async def __aenter__(self):
        return self._response

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records every request and answers from a queue of FakeResponses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0) if self.responses else FakeResponse(204)
        return _ResponseContext(response)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_session():
    """Factory: ``fake_session(FakeResponse(...), ...)``."""
    return FakeSession
