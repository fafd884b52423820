from __future__ import annotations

import logging
import platform
import time
from typing import Any

import httpx

from postcodenl_client.core.errors import ErrorKind, PostcodeNlError
from postcodenl_client.infra.debug import DebugSink

log = logging.getLogger(__name__)

CLIENT_VERSION = "1.0.1"


def default_user_agent() -> str:
    return f"postcodenl-client/{CLIENT_VERSION} Python/{platform.python_version()} httpx/{httpx.__version__}"


class HttpClient:
    def __init__(
        self,
        *,
        app_key: str,
        app_secret: str,
        connect_timeout_seconds: float,
        total_timeout_seconds: float,
        user_agent: str | None = None,
        debug_sink: DebugSink | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._debug_sink = debug_sink
        self._deadline_seconds = connect_timeout_seconds + total_timeout_seconds
        self._client = httpx.Client(
            auth=httpx.BasicAuth(app_key, app_secret),
            timeout=httpx.Timeout(total_timeout_seconds, connect=connect_timeout_seconds),
            headers={"User-Agent": user_agent or default_user_agent()},
            transport=transport,
        )

    def get(self, url: str) -> httpx.Response:
        """
        One GET, no retries. Any status code is returned as-is; only transport
        failures (refused, timeout, TLS, bad URL ...) raise, as a CLIENT error.

        The body is read against a connect + total deadline, so a slow drip fails too.
        """
        response: httpx.Response | None = None
        request: httpx.Request | None = None
        received_headers: httpx.Headers | None = None
        error: str | None = None
        try:
            deadline = time.monotonic() + self._deadline_seconds
            with self._client.stream("GET", url) as streamed:
                request = streamed.request
                received_headers = streamed.headers
                body = _read_until(streamed, deadline)
            response = _buffered(streamed, body)
            return response
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.warning("HTTP error: %s", e)
            if request is None:
                request = _request_of(e)
            error = str(e) or type(e).__name__
            raise PostcodeNlError(
                ErrorKind.CLIENT, f"Connection error: `{error}`", detail=error
            ) from e
        finally:
            if self._debug_sink is not None:
                self._record(_snapshot(url, request, response, received_headers, error))

    def _record(self, snapshot: dict[str, Any]) -> None:
        try:
            self._debug_sink.record(snapshot)
        except Exception as e:
            # diagnostics must never change the lookup outcome
            log.warning("Debug sink failed: %s", e, exc_info=True)

    def close(self) -> None:
        try:
            self._client.close()
        except Exception:
            # close failures don't matter at shutdown
            pass

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def _request_of(e: Exception) -> httpx.Request | None:
    try:
        return e.request  # type: ignore[attr-defined]
    except (AttributeError, RuntimeError):
        # InvalidURL has no request; others may be raised before one was bound
        return None


def _read_until(streamed: httpx.Response, deadline: float) -> bytes:
    chunks: list[bytes] = []
    for chunk in streamed.iter_bytes():
        chunks.append(chunk)
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout("Response not completed within the total timeout", request=streamed.request)
    return b"".join(chunks)


# iter_bytes() already decoded the body
_DECODED_HEADERS = (b"content-encoding", b"content-length", b"transfer-encoding")


def _buffered(streamed: httpx.Response, body: bytes) -> httpx.Response:
    headers = [(k, v) for k, v in streamed.headers.raw if k.lower() not in _DECODED_HEADERS]
    return httpx.Response(streamed.status_code, headers=headers, content=body, request=streamed.request)


def _headers(headers: httpx.Headers) -> dict[str, str]:
    return {k.decode("latin-1"): v.decode("latin-1") for k, v in headers.raw}


def _snapshot(
    url: str,
    request: httpx.Request | None,
    response: httpx.Response | None,
    received_headers: httpx.Headers | None,
    error: str | None,
) -> dict[str, Any]:
    return {
        "request": {
            "method": request.method if request is not None else "GET",
            "url": str(request.url) if request is not None else url,
            "headers": _headers(request.headers) if request is not None else {},
        },
        "response": None
        if response is None
        else {
            "status_code": response.status_code,
            "headers": _headers(received_headers if received_headers is not None else response.headers),
            "body": response.text,
        },
        "error": error,
    }
