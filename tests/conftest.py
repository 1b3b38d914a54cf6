from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from crm_portal.config import PortalConfig, load_portal_config


class FakeHubSpot:
    """Records upstream requests and answers them from canned payloads."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.list_status = 200
        self.list_payload: Any = {"results": []}
        self.create_status = 201
        self.create_payload: Any = {"id": "901", "properties": {}}
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.method == "GET":
            return httpx.Response(self.list_status, json=self.list_payload)
        return httpx.Response(self.create_status, json=self.create_payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def posted_bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def fake_hubspot() -> FakeHubSpot:
    return FakeHubSpot()


@pytest.fixture
def portal_config() -> PortalConfig:
    return load_portal_config(
        {
            "HUBSPOT_TOKEN": "pat-test-token",
            "CUSTOM_OBJECT_TYPE": "2-12345",
            "HUBSPOT_BASE_URL": "https://hubspot.test",
        }
    )
