from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel, Field

from postcodenl_client.app.container import Container
from postcodenl_client.core.errors import PostcodeNlError
from postcodenl_client.core.text import (
    is_valid_postcode_format,
    normalize_house_number,
    normalize_postcode,
    split_house_number,
)
from postcodenl_client.services.address_service import AddressLookupService


class LookupFailure(BaseModel):
    kind: str = Field(..., description="InputInvalid | AddressNotFound | Authentication | Client | Service")
    message: str


class LookupAddressResult(BaseModel):
    """Result of a single postcode + house number lookup."""

    address: dict[str, Any] | None = Field(
        default=None,
        description="Address record (street, city, rdX/rdY, latitude/longitude, BAG ids ...)",
    )
    error: LookupFailure | None = Field(default=None, description="Set when the lookup failed")


class SplitHouseNumberResult(BaseModel):
    house_number: str
    house_number_addition: str


class ValidatePostcodeResult(BaseModel):
    postcode: str
    valid: bool


def lookup_address_result(
    service: AddressLookupService,
    *,
    postcode: str,
    house_number: str,
    house_number_addition: str = "",
    validate_addition: bool = False,
) -> LookupAddressResult:
    try:
        record = service.lookup(postcode, house_number, house_number_addition, validate_addition)
    except PostcodeNlError as e:
        return LookupAddressResult(error=LookupFailure(kind=e.kind.value, message=e.message))
    return LookupAddressResult(address=record.to_dict())


def split_house_number_result(house_number: str) -> SplitHouseNumberResult:
    number, addition = split_house_number(normalize_house_number(house_number))
    return SplitHouseNumberResult(house_number=number, house_number_addition=addition)


def validate_postcode_result(postcode: str) -> ValidatePostcodeResult:
    pc = normalize_postcode(postcode)
    return ValidatePostcodeResult(postcode=pc, valid=is_valid_postcode_format(pc))


def register_address_tools(mcp: FastMCP, container: Container) -> None:
    address_service = container.address_service

    @mcp.tool(
        name="lookup_address",
        description=(
            "Look up a Dutch address by postcode and house number via the Postcode.nl API. "
            "Returns street, city, municipality, province, coordinates and BAG identifiers."
        ),
    )
    def lookup_address(
        postcode: str,
        house_number: str,
        house_number_addition: str = "",
        validate_addition: bool = False,
    ) -> LookupAddressResult:
        """
        postcode + house number -> address.

        - postcode: e.g. '1234AB' or '1234 AB'
        - house_number: e.g. '12', '12a', '12-2' (an addition is split off if none given)
        """
        return lookup_address_result(
            address_service,
            postcode=postcode,
            house_number=house_number,
            house_number_addition=house_number_addition,
            validate_addition=validate_addition,
        )

    @mcp.tool(
        name="split_house_number",
        description="Split a free-form house number ('12a', '12 II', '12-2') into number and addition.",
    )
    def split_house_number_tool(house_number: str) -> SplitHouseNumberResult:
        return split_house_number_result(house_number)

    @mcp.tool(
        name="validate_postcode",
        description="Check whether a Dutch postcode has the 1234AB format (spaces are ignored).",
    )
    def validate_postcode(postcode: str) -> ValidatePostcodeResult:
        return validate_postcode_result(postcode)
