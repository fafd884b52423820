from __future__ import annotations

import re


_POSTCODE = re.compile(r"[0-9]{4}[a-zA-Z]{2}")
_DIGITS = re.compile(r"[0-9]+")

# Official notation is "<number> <addition>", but people write "123a", "123-a", "123 II" ...
_HOUSE_NUMBER = re.compile(
    r"(?P<number>[0-9]+)"
    r"(?:[^0-9a-zA-Z]+(?P<sep_addition>[0-9a-zA-Z ]+)"
    r"|(?P<addition>[a-zA-Z][0-9a-zA-Z ]*))?"
)


def normalize_postcode(raw: str) -> str:
    """'1234 AB ' -> '1234AB'. Case is left alone."""
    return (raw or "").strip().replace(" ", "")


def normalize_house_number(raw: str) -> str:
    return (raw or "").strip()


def is_valid_postcode_format(postcode: str) -> bool:
    """
    True for exactly four digits followed by two letters ('1234AB', '1234ab').
    No separators and no surrounding whitespace; normalize first.
    """
    if not isinstance(postcode, str):
        return False
    return _POSTCODE.fullmatch(postcode) is not None


def is_house_number(value: str) -> bool:
    return isinstance(value, str) and _DIGITS.fullmatch(value) is not None


def split_house_number(raw: str) -> tuple[str, str]:
    """
    Split a house number string into (number, addition).

    "123 2" -> ("123", "2"), "123a4" -> ("123", "a4"), "123-a" -> ("123", "a").
    A letter directly after the digits always starts the addition. Anything
    that doesn't fit is returned unchanged with an empty addition, so the
    digit check can reject it later.
    """
    m = _HOUSE_NUMBER.fullmatch(raw or "")
    if m is None:
        return raw, ""

    addition = m.group("addition") or m.group("sep_addition") or ""
    return m.group("number"), addition
