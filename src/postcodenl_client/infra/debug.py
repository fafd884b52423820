from __future__ import annotations

import threading
from typing import Any, Protocol


class DebugSink(Protocol):
    def record(self, snapshot: dict[str, Any]) -> None: ...


class MemoryDebugSink:
    """
    Keeps the last request/response snapshot in memory.

    snapshot shape:
      { "request": {"method", "url", "headers"},
        "response": {"status_code", "headers", "body"} | None,
        "error": str | None }
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._lock = threading.Lock()
        self._enabled = enabled
        self._data: dict[str, Any] | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool = True) -> None:
        with self._lock:
            self._enabled = bool(enabled)
            if not self._enabled:
                self._data = None

    def record(self, snapshot: dict[str, Any]) -> None:
        with self._lock:
            if self._enabled:
                self._data = snapshot

    def get_debug_data(self) -> dict[str, Any] | None:
        with self._lock:
            return self._data

    def clear(self) -> None:
        with self._lock:
            self._data = None
