"""Shared fixtures for tests. HTTP is faked with httpx.MockTransport, nothing hits the network."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from pydantic import BaseModel

from observability.metrics import MetricsCollector
from rest.executor import APIExecutor

TOKEN = "00Dxx0000001gPL!AQ4AQFpZ"


class Account(BaseModel):
    id: int
    name: str = ""


class FakeServer:
    """Hands out httpx clients whose transport answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def client(self, status_code: int, body: str = "", **response_kwargs) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(status_code, text=body, **response_kwargs)

        return httpx.Client(transport=httpx.MockTransport(handler))

    def failing_client(self, exc_factory: Callable[[httpx.Request], Exception]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            raise exc_factory(request)

        return httpx.Client(transport=httpx.MockTransport(handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector()


@pytest.fixture
def executor(metrics) -> APIExecutor[Account]:
    return APIExecutor(Account, TOKEN, metrics=metrics)
