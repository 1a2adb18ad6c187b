from typing import Any, Dict, List, Union

import httpx
import pytest

from satellite_tracking.services.n2yo_service import N2YOService

API_KEY = "TEST-KEY"
BASE_URL = "https://api.n2yo.test/rest/v1/satellite"


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeN2YO:
    """Replays queued responses and records every request; the last response repeats."""

    def __init__(self, *responses: Union[httpx.Response, Exception]):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        # fresh copy, a response object is bound to the request that read it
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


def ok(payload: Dict[str, Any]) -> httpx.Response:
    return httpx.Response(200, json=payload)


def make_service(upstream: FakeN2YO, **kwargs) -> N2YOService:
    return N2YOService(
        api_key=API_KEY,
        base_url=BASE_URL,
        transport=httpx.MockTransport(upstream),
        **kwargs
    )


@pytest.fixture
def backoff_delays(monkeypatch):
    """Capture backoff delays instead of sleeping."""
    delays: List[float] = []

    async def fake_backoff(self, delay):
        delays.append(delay)

    monkeypatch.setattr(N2YOService, "_backoff", fake_backoff)
    return delays
