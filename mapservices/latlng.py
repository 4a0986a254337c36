"""Points and bounding boxes on the Earth, with their text forms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping


def format_float(value: float) -> str:
    """Format a float in the shortest plain decimal form, without an exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid number: {text!r}")
    return float(text)


@dataclass(frozen=True)
class LatLng:
    """A location given by latitude and longitude in degrees."""

    lat: float = 0.0
    lng: float = 0.0

    def almost_equal(self, other: LatLng, epsilon: float) -> bool:
        """Whether both coordinates differ from ``other`` by less than ``epsilon``."""
        return abs(self.lat - other.lat) < epsilon and abs(self.lng - other.lng) < epsilon

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LatLng:
        data = data or {}
        return cls(lat=float(data.get("lat", 0.0)), lng=float(data.get("lng", 0.0)))

    def __str__(self) -> str:
        return f"{format_float(self.lat)},{format_float(self.lng)}"


@dataclass(frozen=True)
class LatLngBounds:
    """A rectangular area given by its north-east and south-west corners."""

    north_east: LatLng = field(default_factory=LatLng)
    south_west: LatLng = field(default_factory=LatLng)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LatLngBounds:
        data = data or {}
        return cls(
            north_east=LatLng.from_dict(data.get("northeast")),
            south_west=LatLng.from_dict(data.get("southwest")),
        )

    def __str__(self) -> str:
        return f"{self.south_west}|{self.north_east}"


def parse_latlng(location: str) -> LatLng:
    """Parse a ``lat,lng`` string."""
    parts = location.split(",")
    if len(parts) < 2:
        raise ValueError(f"expected 'lat,lng', got {location!r}")
    return LatLng(lat=_parse_float(parts[0]), lng=_parse_float(parts[1]))


def parse_latlng_list(locations: str) -> list[LatLng]:
    """Parse ``|``-separated ``lat,lng`` pairs."""
    return [parse_latlng(item) for item in locations.split("|")]