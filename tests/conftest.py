from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from postcodenl_client.core.models import ClientConfig
from postcodenl_client.infra.debug import MemoryDebugSink
from postcodenl_client.infra.http import HttpClient
from postcodenl_client.services.address_service import AddressLookupService

BASE_URL = "https://api.test/rest"


def address_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "street": "Julianastraat",
        "houseNumber": 30,
        "houseNumberAddition": "",
        "postcode": "2012ES",
        "city": "Haarlem",
        "municipality": "Haarlem",
        "province": "Noord-Holland",
        "rdX": 103242,
        "rdY": 487716,
        "latitude": 52.37487801,
        "longitude": 4.62714526,
        "bagNumberDesignationId": "0392200000029398",
        "bagAddressableObjectId": "0392010000029398",
        "addressType": "building",
        "purposes": ["office"],
        "surfaceArea": 643,
        "houseNumberAdditions": [""],
    }
    payload.update(overrides)
    return payload


def json_response(status_code: int, body: Any) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json"},
    )


class Recorder:
    """MockTransport handler that returns a fixed response and remembers requests."""

    def __init__(self, response: httpx.Response | Callable[[httpx.Request], httpx.Response]) -> None:
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._response):
            return self._response(request)
        # a fresh Response per request; httpx binds a response to the request it answered
        r = self._response
        return httpx.Response(r.status_code, headers=r.headers, content=r.content)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(app_key="my-key", app_secret="my-secret", base_url=BASE_URL)


@pytest.fixture
def make_service(config: ClientConfig):
    created: list[AddressLookupService] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        debug_sink: MemoryDebugSink | None = None,
    ) -> AddressLookupService:
        http = HttpClient(
            app_key=config.app_key,
            app_secret=config.app_secret,
            connect_timeout_seconds=config.connect_timeout_seconds,
            total_timeout_seconds=config.total_timeout_seconds,
            debug_sink=debug_sink,
            transport=httpx.MockTransport(handler),
        )
        service = AddressLookupService(config, http=http)
        created.append(service)
        return service

    yield _make

    for s in created:
        s.close()
