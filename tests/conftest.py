"""Shared fixtures: a scripted fake server behind httpx.MockTransport."""

import httpx
import pytest

HOST = "http://localhost:81"


class FakeServer:
    """Replies to requests from a script of expected (method, path) pairs.

    Each scripted reply is used once. Unexpected requests fail the test.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._replies: dict[tuple[str, str], list[httpx.Response]] = {}

    def reply(self, method: str, path: str, status_code: int, **kwargs) -> "FakeServer":
        self._replies.setdefault((method, path), []).append(httpx.Response(status_code, **kwargs))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._replies.get((request.method, request.url.path))
        if not queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return queue.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def done(self) -> None:
        pending = [key for key, queue in self._replies.items() if queue]
        assert not pending, f"Expected requests were not made: {pending}"

    def methods(self) -> list[str]:
        return [request.method for request in self.requests]


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def settings():
    return {"host": HOST}
