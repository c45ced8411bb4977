from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

ENDPOINT = "https://scraper.test/v2/actor-tasks/ig-task/run-sync"


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, scraper_endpoint_url=ENDPOINT, scraper_api_token="tok-123")


class RecordingTransport:
    """MockTransport que responde en orden y guarda los cuerpos enviados."""

    def __init__(self, responder: Callable[[int, httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self.bodies: list[dict[str, Any]] = []
        self._responder = responder
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(json.loads(request.content))
        return self._responder(len(self.requests) - 1, request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    def factory(*responses: Any) -> RecordingTransport:
        """Cada respuesta es un JSON, un `httpx.Response` o una excepción a lanzar.

        La última se repite si hay más llamadas que respuestas.
        """

        def responder(index: int, request: httpx.Request) -> httpx.Response:
            item = responses[min(index, len(responses) - 1)]
            if isinstance(item, type) and issubclass(item, Exception):
                raise item("boom", request=request)
            if isinstance(item, httpx.Response):
                return item
            return httpx.Response(200, json=item)

        return RecordingTransport(responder)

    return factory
