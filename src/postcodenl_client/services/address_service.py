from __future__ import annotations

import logging
from typing import Any

import httpx

from postcodenl_client.core.classify import classify_payload
from postcodenl_client.core.errors import ErrorKind, PostcodeNlError
from postcodenl_client.core.models import AddressRecord, ClientConfig, LookupRequest
from postcodenl_client.core.text import (
    is_house_number,
    is_valid_postcode_format,
    normalize_house_number,
    normalize_postcode,
    split_house_number,
)
from postcodenl_client.infra.debug import DebugSink
from postcodenl_client.infra.http import HttpClient

log = logging.getLogger(__name__)

# expected outcomes, not faults
_QUIET_KINDS = (ErrorKind.ADDRESS_NOT_FOUND, ErrorKind.INPUT_INVALID)


class AddressLookupService:
    def __init__(
        self,
        config: ClientConfig,
        *,
        http: HttpClient | None = None,
        debug_sink: DebugSink | None = None,
    ) -> None:
        self._config = config
        self._http = http or HttpClient(
            app_key=config.app_key,
            app_secret=config.app_secret,
            connect_timeout_seconds=config.connect_timeout_seconds,
            total_timeout_seconds=config.total_timeout_seconds,
            debug_sink=debug_sink,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build_request(
        self,
        postcode: str,
        house_number: str,
        house_number_addition: str = "",
        validate_addition: bool = False,
    ) -> LookupRequest:
        """
        Normalize and validate the input. Raises INPUT_INVALID before any I/O.

        If no addition is given, it is split off the house number ("12a" -> "12", "a").
        """
        postcode = normalize_postcode(postcode)
        house_number = normalize_house_number(house_number)
        house_number_addition = normalize_house_number(house_number_addition)

        if house_number_addition == "":
            house_number, house_number_addition = split_house_number(house_number)

        if not is_valid_postcode_format(postcode):
            raise PostcodeNlError(
                ErrorKind.INPUT_INVALID, f"Postcode `{postcode}` needs to be in the 1234AB format."
            )
        if not is_house_number(house_number):
            raise PostcodeNlError(
                ErrorKind.INPUT_INVALID, f"House number `{house_number}` must contain digits only."
            )

        return LookupRequest(
            postcode=postcode,
            house_number=house_number,
            house_number_addition=house_number_addition,
            validate_addition=validate_addition,
        )

    def lookup(
        self,
        postcode: str,
        house_number: str,
        house_number_addition: str = "",
        validate_addition: bool = False,
    ) -> AddressRecord:
        """
        Look up one address.

        Args:
            postcode: Dutch postcode, '1234AB' or '1234 AB'
            house_number: house number, may include the addition ('12a', '12-2')
            house_number_addition: explicit addition, overrides splitting
            validate_addition: fail with INPUT_INVALID if the addition isn't known

        Returns:
            AddressRecord

        Raises:
            PostcodeNlError, with one of the five ErrorKind values
        """
        req = self.build_request(postcode, house_number, house_number_addition, validate_addition)
        url = f"{self._config.base_url.rstrip('/')}/{req.path}"

        response = self._http.get(url)
        payload = _decode(response)

        if not response.is_success:
            kind, message = classify_payload(response.status_code, payload)
            self._log_failure(kind, message, response.status_code)
            raise PostcodeNlError(
                kind, message, status_code=response.status_code, detail=response.text
            )

        if not isinstance(payload, dict) or "postcode" not in payload:
            raise _not_understood(response)

        if req.validate_addition and payload.get("houseNumberAddition") is None:
            raise PostcodeNlError(
                ErrorKind.INPUT_INVALID,
                _unknown_addition_message(req.house_number_addition, payload.get("houseNumberAdditions")),
                status_code=response.status_code,
            )

        try:
            return AddressRecord.from_payload(payload)
        except (TypeError, ValueError, OverflowError) as e:
            raise _not_understood(response, e) from e

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> AddressLookupService:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _log_failure(self, kind: ErrorKind, message: str, status_code: int) -> None:
        if kind in _QUIET_KINDS:
            log.info("Lookup failed (%s, status %s): %s", kind.value, status_code, message)
        elif kind is ErrorKind.AUTHENTICATION:
            log.error("Postcode.nl rejected credentials for key %s: %s", self._config.app_key, message)
        else:
            log.error("Lookup failed (%s, status %s): %s", kind.value, status_code, message)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _not_understood(response: httpx.Response, cause: Exception | None = None) -> PostcodeNlError:
    if cause is None:
        log.error("Unexpected Postcode.nl response (status %s)", response.status_code)
    else:
        log.error("Unexpected Postcode.nl response (status %s): %s", response.status_code, cause)
    return PostcodeNlError(
        ErrorKind.CLIENT,
        f"Did not understand Postcode.nl API response: `{response.text}`.",
        status_code=response.status_code,
        detail=response.text,
    )


def _unknown_addition_message(addition: str, known: Any) -> str:
    additions = [str(a) for a in known] if isinstance(known, list) else []
    if not additions:
        return f"House number addition `{addition}` is not known for this address, no additions are known."
    return (
        f"House number addition `{addition}` is not known for this address, "
        f"valid additions are: `{'`, `'.join(additions)}`."
    )
