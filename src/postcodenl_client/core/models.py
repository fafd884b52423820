from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from postcodenl_client.core.errors import ErrorKind, PostcodeNlError

DEFAULT_BASE_URL = "https://api.postcode.nl/rest"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 3
DEFAULT_TOTAL_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class ClientConfig:
    app_key: str
    app_secret: str
    base_url: str = DEFAULT_BASE_URL
    connect_timeout_seconds: int = DEFAULT_CONNECT_TIMEOUT_SECONDS
    total_timeout_seconds: int = DEFAULT_TOTAL_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not (self.app_key or "").strip() or not (self.app_secret or "").strip():
            raise PostcodeNlError(
                ErrorKind.CLIENT,
                "No application key / secret configured, you can obtain these at https://api.postcode.nl.",
            )
        if self.connect_timeout_seconds <= 0 or self.total_timeout_seconds <= 0:
            raise PostcodeNlError(ErrorKind.CLIENT, "Timeouts must be positive numbers of seconds.")

    def __repr__(self) -> str:
        # keep the secret out of logs
        return (
            f"ClientConfig(app_key={self.app_key!r}, app_secret='***', base_url={self.base_url!r}, "
            f"connect_timeout_seconds={self.connect_timeout_seconds}, "
            f"total_timeout_seconds={self.total_timeout_seconds})"
        )


@dataclass(frozen=True)
class LookupRequest:
    postcode: str
    house_number: str
    house_number_addition: str = ""
    validate_addition: bool = False

    @property
    def path(self) -> str:
        segments = (self.postcode, self.house_number, self.house_number_addition)
        return "addresses/" + "/".join(quote(s, safe="") for s in segments)


@dataclass(frozen=True)
class AddressRecord:
    street: str
    house_number: int
    house_number_addition: str | None
    postcode: str
    city: str
    municipality: str
    province: str
    rd_x: int
    rd_y: int
    latitude: float
    longitude: float
    bag_number_designation_id: str
    bag_addressable_object_id: str
    address_type: str
    purposes: tuple[str, ...]
    surface_area: int
    # every addition known for this house number
    house_number_additions: tuple[str, ...]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AddressRecord:
        def _str(key: str) -> str:
            v = payload.get(key)
            return "" if v is None else str(v)

        def _int(key: str) -> int:
            v = payload.get(key)
            return int(v) if v is not None else 0

        def _float(key: str) -> float:
            v = payload.get(key)
            return float(v) if v is not None else 0.0

        def _strs(key: str) -> tuple[str, ...]:
            v = payload.get(key)
            if v is None:
                return ()
            if not isinstance(v, list):
                raise TypeError(f"{key} must be a list, got {type(v).__name__}")
            return tuple(str(x) for x in v)

        addition = payload.get("houseNumberAddition")

        return cls(
            street=_str("street"),
            house_number=_int("houseNumber"),
            house_number_addition=None if addition is None else str(addition),
            postcode=_str("postcode"),
            city=_str("city"),
            municipality=_str("municipality"),
            province=_str("province"),
            rd_x=_int("rdX"),
            rd_y=_int("rdY"),
            latitude=_float("latitude"),
            longitude=_float("longitude"),
            bag_number_designation_id=_str("bagNumberDesignationId"),
            bag_addressable_object_id=_str("bagAddressableObjectId"),
            address_type=_str("addressType"),
            purposes=_strs("purposes"),
            surface_area=_int("surfaceArea"),
            house_number_additions=_strs("houseNumberAdditions"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "street": self.street,
            "houseNumber": self.house_number,
            "houseNumberAddition": self.house_number_addition,
            "postcode": self.postcode,
            "city": self.city,
            "municipality": self.municipality,
            "province": self.province,
            "rdX": self.rd_x,
            "rdY": self.rd_y,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "bagNumberDesignationId": self.bag_number_designation_id,
            "bagAddressableObjectId": self.bag_addressable_object_id,
            "addressType": self.address_type,
            "purposes": list(self.purposes),
            "surfaceArea": self.surface_area,
            "houseNumberAdditions": list(self.house_number_additions),
        }
