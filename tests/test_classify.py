from __future__ import annotations

import pytest

from postcodenl_client.core.classify import EXCEPTION_KINDS, classify, classify_payload
from postcodenl_client.core.errors import ErrorKind


@pytest.mark.parametrize(
    "exception_id, kind",
    [
        ("PostcodeNl_Controller_Plugin_HttpBasicAuthentication_Exception", ErrorKind.AUTHENTICATION),
        ("PostcodeNl_Controller_Plugin_HttpBasicAuthentication_NotAuthorizedException", ErrorKind.AUTHENTICATION),
        ("PostcodeNl_Controller_Plugin_HttpBasicAuthentication_PasswordNotCorrectException", ErrorKind.AUTHENTICATION),
        ("React_Controller_Action_InvalidParameterException", ErrorKind.INPUT_INVALID),
        ("PostcodeNl_Controller_Address_InvalidPostcodeException", ErrorKind.INPUT_INVALID),
        ("PostcodeNl_Controller_Address_InvalidHouseNumberException", ErrorKind.INPUT_INVALID),
        ("PostcodeNl_Controller_Address_NoPostcodeSpecifiedException", ErrorKind.INPUT_INVALID),
        ("PostcodeNl_Controller_Address_NoHouseNumberSpecifiedException", ErrorKind.INPUT_INVALID),
        ("React_Model_Property_Validation_Number_ValueTooHighException", ErrorKind.INPUT_INVALID),
        ("PostcodeNl_Service_PostcodeAddress_AddressNotFoundException", ErrorKind.ADDRESS_NOT_FOUND),
    ],
)
def test_known_exception_ids(exception_id, kind):
    got, message = classify(400, exception_id, "remote says no")
    assert got is kind
    assert message


def test_unknown_exception_id_is_service():
    kind, message = classify(500, "PostcodeNl_Something_NewException", "Database down")
    assert kind is ErrorKind.SERVICE
    assert message == "Database down"


def test_message_falls_back_to_exception_id():
    kind, message = classify(503, "Some_UnknownException", None)
    assert kind is ErrorKind.SERVICE
    assert message == "Some_UnknownException"


def test_password_not_correct_has_fixed_message():
    _, message = classify(
        401, "PostcodeNl_Controller_Plugin_HttpBasicAuthentication_PasswordNotCorrectException", "whatever"
    )
    assert message == "Secret not correct."


def test_missing_exception_id_is_client():
    kind, message = classify(502, None, "ignored")
    assert kind is ErrorKind.CLIENT
    assert "502" in message


@pytest.mark.parametrize(
    "payload",
    [None, "oops", [1, 2], {}, {"exception": "no id"}, {"exceptionId": None, "exception": "x"}],
)
def test_unstructured_payloads_are_client(payload):
    kind, message = classify_payload(500, payload)
    assert kind is ErrorKind.CLIENT
    assert "`500`" in message


def test_empty_exception_id_is_service():
    kind, message = classify(500, "", None)
    assert kind is ErrorKind.SERVICE
    assert "`500`" in message


@pytest.mark.parametrize(
    "payload",
    [
        {"exceptionId": "", "exception": "x"},
        {"exceptionId": 42, "exception": "x"},
        {"exceptionId": {"nested": True}},
        {"exceptionId": False},
    ],
)
def test_present_but_odd_exception_id_is_service(payload):
    kind, message = classify_payload(500, payload)
    assert kind is ErrorKind.SERVICE
    assert message


def test_classify_payload_uses_table():
    kind, message = classify_payload(
        404,
        {
            "exceptionId": "PostcodeNl_Service_PostcodeAddress_AddressNotFoundException",
            "exception": "Combination does not exist.",
        },
    )
    assert kind is ErrorKind.ADDRESS_NOT_FOUND
    assert message == "Combination does not exist."


@pytest.mark.parametrize("status", [0, 100, 302, 400, 401, 404, 418, 500, 599, 999])
@pytest.mark.parametrize("exception_id", [None, "", "Unknown", *EXCEPTION_KINDS])
def test_classify_is_total(status, exception_id):
    kind, message = classify(status, exception_id, None)
    assert kind in ErrorKind
    assert isinstance(message, str) and message
