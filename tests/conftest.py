"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Union

import httpx
import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

ENDPOINT = "https://video.example.test/v1/generate"

# A reply is either a (status_code, json_body) pair or a callable taking the
# request, which may raise an httpx transport error.
Reply = Union[tuple, Callable[[httpx.Request], httpx.Response]]


class FakeVideoProvider:
    """Scripted stand-in for the remote video API.

    ``submit`` answers the POST; ``statuses`` are served in order to the
    status GETs, the last one repeating once the script runs out.
    """

    def __init__(self, submit: Reply, statuses: Iterable[Reply] = ()):
        self.submit = submit
        self.statuses: List[Reply] = list(statuses)
        self.requests: List[httpx.Request] = []

    @property
    def status_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return _build(self.submit, request)
        index = min(len(self.status_requests), len(self.statuses)) - 1
        return _build(self.statuses[index], request)

    def http_client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), **kwargs)


def _build(reply: Reply, request: httpx.Request) -> httpx.Response:
    if callable(reply):
        return reply(request)
    status_code, body = reply
    if isinstance(body, (bytes, str)):
        return httpx.Response(status_code, content=body)
    return httpx.Response(status_code, json=body)


def status(value: str, video_url: Optional[str] = None, **extra: Any) -> tuple:
    body = {"status": value, **extra}
    if video_url:
        body["video_url"] = video_url
    return (200, body)


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Failed to fetch", request=request)


def redirect_loop(request: httpx.Request) -> httpx.Response:
    return httpx.Response(307, headers={"Location": str(request.url)})


def corrupt_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")


@pytest.fixture
def endpoint() -> str:
    return ENDPOINT
