from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INPUT_INVALID = "InputInvalid"
    ADDRESS_NOT_FOUND = "AddressNotFound"
    AUTHENTICATION = "Authentication"
    CLIENT = "Client"
    SERVICE = "Service"


class PostcodeNlError(Exception):
    """
    Raised for every failed lookup. ``kind`` says which of the five failure
    categories applies; callers switch on it instead of catching subclasses.

    Authentication failures are configuration faults: log them and show the
    end user something generic.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __repr__(self) -> str:
        return f"PostcodeNlError({self.kind.value}, {self.message!r})"
