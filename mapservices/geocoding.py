"""Geocoding requests and the results returned for them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from mapservices.errors import MapsError
from mapservices.latlng import LatLng, LatLngBounds

_ACCEPTED_STATUSES = ("OK", "ZERO_RESULTS")


class GeocodeAccuracy(str, Enum):
    """How precise a geocoded location is."""

    ROOFTOP = "ROOFTOP"
    RANGE_INTERPOLATED = "RANGE_INTERPOLATED"
    GEOMETRIC_CENTER = "GEOMETRIC_CENTER"
    APPROXIMATE = "APPROXIMATE"


@dataclass
class GeocodingRequest:
    """Parameters of a forward or reverse geocoding request.

    ``components`` maps a component name such as ``country`` to its filter
    value. ``custom`` holds extra query parameters passed through unchanged.
    """

    address: str = ""
    components: Mapping[str, str] = field(default_factory=dict)
    bounds: LatLngBounds | None = None
    region: str = ""
    latlng: LatLng | None = None
    result_type: Sequence[str] = field(default_factory=list)
    location_type: Sequence[Union[GeocodeAccuracy, str]] = field(default_factory=list)
    place_id: str = ""
    language: str = ""
    enable_address_descriptor: bool = False
    custom: Mapping[str, Union[str, Sequence[str]]] = field(default_factory=dict)

    def validate_geocode(self) -> None:
        """Check that a forward geocoding request names something to look up."""
        if not self.address and not self.components and self.latlng is None:
            raise MapsError("maps: address, components and LatLng are all missing")

    def validate_reverse(self) -> None:
        """Check that a reverse geocoding request has a point or a place."""
        if self.latlng is None and not self.place_id:
            raise MapsError("maps: LatLng and PlaceID are both missing")

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request."""
        query: dict[str, list[str]] = {
            name: [value] if isinstance(value, str) else list(value)
            for name, value in self.custom.items()
        }
        if self.address:
            query["address"] = [self.address]
        filters = [f"{name}:{value}" for name, value in self.components.items()]
        if filters:
            query["components"] = ["|".join(filters)]
        if self.bounds is not None:
            query["bounds"] = [str(self.bounds)]
        if self.region:
            query["region"] = [self.region]
        if self.latlng is not None:
            query["latlng"] = [str(self.latlng)]
        if self.result_type:
            query["result_type"] = ["|".join(self.result_type)]
        if self.location_type:
            query["location_type"] = [
                "|".join(GeocodeAccuracy(kind).value for kind in self.location_type)
            ]
        if self.place_id:
            query["place_id"] = [self.place_id]
        if self.language:
            query["language"] = [self.language]
        if self.enable_address_descriptor:
            query["enable_address_descriptor"] = ["true"]
        return query


@dataclass(frozen=True)
class AddressComponent:
    """One part of an address."""

    long_name: str = ""
    short_name: str = ""
    types: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AddressComponent:
        data = data or {}
        return cls(
            long_name=data.get("long_name", ""),
            short_name=data.get("short_name", ""),
            types=list(data.get("types") or []),
        )


@dataclass(frozen=True)
class AddressPlusCode:
    """An open location code, in global and compound form."""

    global_code: str = ""
    compound_code: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AddressPlusCode:
        data = data or {}
        return cls(
            global_code=data.get("global_code", ""),
            compound_code=data.get("compound_code", ""),
        )


@dataclass(frozen=True)
class AddressGeometry:
    """Where an address lies and the area around it."""

    location: LatLng = field(default_factory=LatLng)
    location_type: str = ""
    bounds: LatLngBounds = field(default_factory=LatLngBounds)
    viewport: LatLngBounds = field(default_factory=LatLngBounds)
    types: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AddressGeometry:
        data = data or {}
        return cls(
            location=LatLng.from_dict(data.get("location")),
            location_type=data.get("location_type", ""),
            bounds=LatLngBounds.from_dict(data.get("bounds")),
            viewport=LatLngBounds.from_dict(data.get("viewport")),
            types=list(data.get("types") or []),
        )


@dataclass(frozen=True)
class GeocodingResult:
    """A single geocoded address."""

    address_components: list[AddressComponent] = field(default_factory=list)
    formatted_address: str = ""
    geometry: AddressGeometry = field(default_factory=AddressGeometry)
    types: list[str] = field(default_factory=list)
    place_id: str = ""
    partial_match: bool = False
    plus_code: AddressPlusCode = field(default_factory=AddressPlusCode)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GeocodingResult:
        data = data or {}
        return cls(
            address_components=[
                AddressComponent.from_dict(item) for item in data.get("address_components") or []
            ],
            formatted_address=data.get("formatted_address", ""),
            geometry=AddressGeometry.from_dict(data.get("geometry")),
            types=list(data.get("types") or []),
            place_id=data.get("place_id", ""),
            partial_match=bool(data.get("partial_match", False)),
            plus_code=AddressPlusCode.from_dict(data.get("plus_code")),
        )


@dataclass(frozen=True)
class GeocodingResponse:
    """The results of a geocoding request.

    ``address_descriptor`` holds the descriptor of a reverse geocoding
    target as sent by the service, or an empty mapping.
    """

    results: list[GeocodingResult] = field(default_factory=list)
    address_descriptor: dict[str, Any] = field(default_factory=dict)


def _check_status(data: Mapping[str, Any]) -> None:
    status = data.get("status", "")
    if status in _ACCEPTED_STATUSES:
        return
    message = data.get("error_message", "")
    text = f"maps: {status}"
    if message:
        text = f"{text} - {message}"
    raise MapsError(text)


def parse_geocoding_response(data: Union[str, bytes, Mapping[str, Any]]) -> GeocodingResponse:
    """Build a response from the service's JSON, raising on a failure status."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise MapsError(f"maps: invalid response: {exc}") from exc
    if not isinstance(data, Mapping):
        raise MapsError("maps: invalid response: expected a JSON object")
    _check_status(data)
    return GeocodingResponse(
        results=[GeocodingResult.from_dict(item) for item in data.get("results") or []],
        address_descriptor=dict(data.get("address_descriptor") or {}),
    )