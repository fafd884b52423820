from __future__ import annotations

from typing import Any

from postcodenl_client.core.errors import ErrorKind

PASSWORD_NOT_CORRECT = "PostcodeNl_Controller_Plugin_HttpBasicAuthentication_PasswordNotCorrectException"

# exceptionId (as sent by api.postcode.nl) -> local kind. Anything not listed is SERVICE.
EXCEPTION_KINDS: dict[str, ErrorKind] = {
    # authentication plugin
    "PostcodeNl_Controller_Plugin_HttpBasicAuthentication_Exception": ErrorKind.AUTHENTICATION,
    "PostcodeNl_Controller_Plugin_HttpBasicAuthentication_NotAuthorizedException": ErrorKind.AUTHENTICATION,
    PASSWORD_NOT_CORRECT: ErrorKind.AUTHENTICATION,
    # parameter / postcode / house number validation
    "React_Controller_Action_InvalidParameterException": ErrorKind.INPUT_INVALID,
    "PostcodeNl_Controller_Address_InvalidPostcodeException": ErrorKind.INPUT_INVALID,
    "PostcodeNl_Controller_Address_InvalidHouseNumberException": ErrorKind.INPUT_INVALID,
    "PostcodeNl_Controller_Address_NoPostcodeSpecifiedException": ErrorKind.INPUT_INVALID,
    "PostcodeNl_Controller_Address_NoHouseNumberSpecifiedException": ErrorKind.INPUT_INVALID,
    "React_Model_Property_Validation_Number_ValueTooHighException": ErrorKind.INPUT_INVALID,
    # valid input, nothing there
    "PostcodeNl_Service_PostcodeAddress_AddressNotFoundException": ErrorKind.ADDRESS_NOT_FOUND,
}

_FIXED_MESSAGES: dict[str, str] = {
    PASSWORD_NOT_CORRECT: "Secret not correct.",
}


def classify(
    status_code: int, exception_id: str | None, exception: str | None
) -> tuple[ErrorKind, str]:
    """
    Map a failed response onto (kind, message).

    Without an exceptionId (None) the service is misbehaving in a way the caller
    can't act on, so it's a CLIENT error naming the status code. Any id that is
    present, even an empty one, goes through the table.
    """
    if exception_id is None:
        return ErrorKind.CLIENT, f"Postcode.nl API returned status `{status_code}`."

    kind = EXCEPTION_KINDS.get(exception_id, ErrorKind.SERVICE)
    message = (
        _FIXED_MESSAGES.get(exception_id)
        or exception
        or exception_id
        or f"Postcode.nl API returned status `{status_code}` with an empty exceptionId."
    )
    return kind, message


def classify_payload(status_code: int, payload: Any) -> tuple[ErrorKind, str]:
    """Same as classify(), starting from a decoded (or undecodable -> None) body."""
    if not isinstance(payload, dict):
        return classify(status_code, None, None)

    exception_id = payload.get("exceptionId")
    if exception_id is not None:
        exception_id = str(exception_id)

    exception = payload.get("exception")
    if exception is not None:
        exception = str(exception)

    return classify(status_code, exception_id, exception)
