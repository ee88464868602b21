"""Mocked HTTP plumbing for adapter tests."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import httpx

from kunrecon.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from kunrecon.config.http_resilience import ResilienceConfig

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


def mock_client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    """Client factory whose network transport is ``handler``; retries and limits stay real."""

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return factory


def request_json(request: httpx.Request) -> dict[str, object]:
    return json.loads(request.content.decode("utf-8"))
