from __future__ import annotations

from dataclasses import dataclass

from postcodenl_client.app.settings import Settings, get_settings
from postcodenl_client.infra.debug import MemoryDebugSink
from postcodenl_client.infra.http import HttpClient
from postcodenl_client.services.address_service import AddressLookupService


@dataclass(frozen=True)
class Container:
    settings: Settings
    debug_sink: MemoryDebugSink | None
    http: HttpClient
    address_service: AddressLookupService


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or get_settings()
    client = settings.client

    debug_sink = MemoryDebugSink() if settings.debug else None
    http = HttpClient(
        app_key=client.app_key,
        app_secret=client.app_secret,
        connect_timeout_seconds=client.connect_timeout_seconds,
        total_timeout_seconds=client.total_timeout_seconds,
        debug_sink=debug_sink,
    )

    address_service = AddressLookupService(client, http=http)

    return Container(
        settings=settings,
        debug_sink=debug_sink,
        http=http,
        address_service=address_service,
    )
