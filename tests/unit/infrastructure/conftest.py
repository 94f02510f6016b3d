"""Fixtures for adapter tests backed by httpx.MockTransport."""

import json

import httpx
import pytest

from campus_console.infrastructure.adapters.outbound.backend import BackendRestClient


class RecordingHandler:
    """MockTransport handler answering from a queue and recording requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, json_body=None, headers=None) -> None:
        content = b"" if json_body is None else json.dumps(json_body).encode()
        self.responses.append(
            httpx.Response(status_code, content=content, headers=headers or {})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(200, content=b"[]")
        return self.responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def rest_client(handler):
    http_client = BackendRestClient.build_http_client(
        "http://backend.test/",
        "anon-key",
        access_token="operator-token",
        transport=httpx.MockTransport(handler),
    )
    return BackendRestClient(http_client)
