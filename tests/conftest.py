from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import orjson
import pytest


_BASE_URL = "https://api.feedstream.test/api/v1.0/"

os.environ["FEEDSTREAM_API_BASE_URL"] = _BASE_URL
os.environ["FEEDSTREAM_API_KEY"] = "test-key"
os.environ["FEEDSTREAM_LOG_JSON"] = "false"

Responder = Callable[[httpx.Request], httpx.Response]


@dataclass
class MockApi:
    """Routes `(method, path relative to the API base)` to canned responses."""

    routes: dict[tuple[str, str], Responder] = field(default_factory=dict)
    calls: list[httpx.Request] = field(default_factory=list)

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        content = b"" if body is None else orjson.dumps(body)

        def _respond(_: httpx.Request) -> httpx.Response:
            return httpx.Response(status, content=content, headers=headers or {})

        self.routes[(method.upper(), path)] = _respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        base_path = httpx.URL(_BASE_URL).path
        rel = request.url.path.removeprefix(base_path)
        responder = self.routes.get((request.method, rel))
        if responder is None:
            return httpx.Response(404, json={"detail": f"no route for {request.method} {rel}"})
        return responder(request)

    @property
    def last(self) -> httpx.Request:
        assert self.calls, "no requests were sent"
        return self.calls[-1]

    def last_json(self) -> Any:
        return orjson.loads(self.last.content)


@pytest.fixture()
def mock_api() -> MockApi:
    return MockApi()


@pytest.fixture()
def feed_client(mock_api: MockApi) -> Iterator[Any]:
    from feedstream_client.client import FeedClient
    from feedstream_client.core.config import Settings

    http = httpx.Client(
        base_url=_BASE_URL, transport=httpx.MockTransport(mock_api.handler)
    )
    client = FeedClient(settings=Settings(), http=http)
    try:
        yield client
    finally:
        http.close()


@pytest.fixture()
def activity_json() -> dict[str, Any]:
    return {
        "id": "1e42deb6-7c2f-4da9-b6e6-0c6e5cc9815d",
        "actor": "eric",
        "verb": "tweet",
        "object": "Hello world 3",
        "foreign_id": "tweet:1",
        "time": "2018-11-14T15:54:45.268000",
        "to": ["timeline:jessica"],
        "origin": None,
        "target": "",
    }
