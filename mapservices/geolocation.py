"""Geolocation requests built from cell towers and WiFi access points."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from mapservices.errors import MapsError
from mapservices.latlng import LatLng


class RadioType(str, Enum):
    """Mobile radio types."""

    LTE = "lte"
    GSM = "gsm"
    CDMA = "cdma"
    WCDMA = "wcdma"


def _number(value: Union[int, float]) -> Union[int, float]:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _non_zero(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: _number(value) if isinstance(value, (int, float)) else value
            for key, value in pairs if value}


@dataclass
class CellTower:
    """A cell tower seen by the device."""

    cell_id: int = 0
    location_area_code: int = 0
    mobile_country_code: int = 0
    mobile_network_code: int = 0
    age: int = 0
    signal_strength: int = 0
    timing_advance: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object for this tower, leaving out zero fields."""
        return _non_zero([
            ("cellId", self.cell_id),
            ("locationAreaCode", self.location_area_code),
            ("mobileCountryCode", self.mobile_country_code),
            ("mobileNetworkCode", self.mobile_network_code),
            ("age", self.age),
            ("signalStrength", self.signal_strength),
            ("timingAdvance", self.timing_advance),
        ])


@dataclass
class WiFiAccessPoint:
    """A WiFi access point seen by the device."""

    mac_address: str = ""
    signal_strength: float = 0.0
    age: int = 0
    channel: int = 0
    signal_to_noise_ratio: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object for this access point, leaving out zero fields."""
        return _non_zero([
            ("macAddress", self.mac_address),
            ("signalStrength", self.signal_strength),
            ("age", self.age),
            ("channel", self.channel),
            ("signalToNoiseRatio", self.signal_to_noise_ratio),
        ])


@dataclass
class GeolocationRequest:
    """A geolocation request; every field is optional."""

    home_mobile_country_code: int = 0
    home_mobile_network_code: int = 0
    radio_type: Union[RadioType, str] = ""
    carrier: str = ""
    consider_ip: bool = False
    cell_towers: list[CellTower] = field(default_factory=list)
    wifi_access_points: list[WiFiAccessPoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the request body; ``considerIp`` is always present."""
        body: dict[str, Any] = {}
        if self.home_mobile_country_code:
            body["homeMobileCountryCode"] = self.home_mobile_country_code
        if self.home_mobile_network_code:
            body["homeMobileNetworkCode"] = self.home_mobile_network_code
        if self.radio_type:
            body["radioType"] = RadioType(self.radio_type).value
        if self.carrier:
            body["carrier"] = self.carrier
        body["considerIp"] = self.consider_ip
        if self.cell_towers:
            body["cellTowers"] = [tower.to_dict() for tower in self.cell_towers]
        if self.wifi_access_points:
            body["wifiAccessPoints"] = [point.to_dict() for point in self.wifi_access_points]
        return body

    def to_json(self) -> str:
        """Return the request body as compact JSON."""
        text = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        for char, escaped in (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026"),
                              ("\u2028", "\\u2028"), ("\u2029", "\\u2029")):
            text = text.replace(char, escaped)
        return text


@dataclass(frozen=True)
class GeolocationResult:
    """An estimated location and its accuracy in metres."""

    location: LatLng = field(default_factory=LatLng)
    accuracy: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GeolocationResult:
        data = data or {}
        return cls(
            location=LatLng.from_dict(data.get("location")),
            accuracy=float(data.get("accuracy", 0.0)),
        )


@dataclass(frozen=True)
class GeolocationErrorDetail:
    """One entry in the list of errors the service reports."""

    domain: str = ""
    reason: str = ""
    message: str = ""


@dataclass(frozen=True)
class GeolocationError:
    """An error object returned by the service."""

    errors: list[GeolocationErrorDetail] = field(default_factory=list)
    code: int = 0
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GeolocationError:
        data = data or {}
        return cls(
            errors=[
                GeolocationErrorDetail(
                    domain=item.get("domain", ""),
                    reason=item.get("reason", ""),
                    message=item.get("message", ""),
                )
                for item in data.get("errors") or []
            ],
            code=int(data.get("code", 0)),
            message=data.get("message", ""),
        )


def parse_geolocation_response(data: Union[str, bytes, Mapping[str, Any]]) -> GeolocationResult:
    """Build a result from the service's JSON, raising when it holds an error."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise MapsError(f"maps: invalid response: {exc}") from exc
    if not isinstance(data, Mapping):
        raise MapsError("maps: invalid response: expected a JSON object")
    error = GeolocationError.from_dict(data.get("error"))
    if error.code != 0 or error.errors:
        raise MapsError(error.message)
    return GeolocationResult.from_dict(data)