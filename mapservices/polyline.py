"""Encoded polyline format: compact strings holding a path of points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from mapservices.latlng import LatLng

_INT64_RANGE = 1 << 64
_INT64_HALF = 1 << 63


def _to_int64(value: int) -> int:
    return ((value + _INT64_HALF) % _INT64_RANGE) - _INT64_HALF


def _decode_ints(data: bytes) -> Iterator[int]:
    """Yield each complete encoded integer; a truncated tail is dropped."""
    result = 0
    shift = 0
    for raw in data:
        chunk = (raw - 63) & 0xFF
        if shift < 64:
            result = _to_int64(result + ((chunk & 0x1F) << shift))
        shift = (shift + 5) & 0xFF
        if chunk < 0x20:
            negative = result & 1
            result >>= 1
            if negative:
                result = ~result
            yield result
            result = 0
            shift = 0


def _encode_int(value: int) -> bytes:
    value = _to_int64(~(value << 1) if value < 0 else value << 1)
    out = bytearray()
    while value >= 0x20:
        out.append((0x20 | (value & 0x1F)) + 63)
        value >>= 5
    out.append(value + 63)
    return bytes(out)


@dataclass(frozen=True)
class Polyline:
    """A path of points held as an encoded polyline string."""

    points: str = ""

    def decode(self) -> list[LatLng]:
        """Decode the points of this polyline."""
        deltas = _decode_ints(self.points.encode("utf-8"))
        path: list[LatLng] = []
        lat = lng = 0
        for dlat, dlng in zip(deltas, deltas):
            lat, lng = lat + dlat, lng + dlng
            path.append(LatLng(lat=lat * 1e-5, lng=lng * 1e-5))
        return path


def decode_polyline(poly: str) -> list[LatLng]:
    """Decode an encoded polyline string into points."""
    return Polyline(poly).decode()


def encode(path: Iterable[LatLng]) -> str:
    """Encode a path of points as a polyline string."""
    out = bytearray()
    prev_lat = prev_lng = 0
    for point in path:
        lat = int(point.lat * 1e5)
        lng = int(point.lng * 1e5)
        out += _encode_int(lat - prev_lat)
        out += _encode_int(lng - prev_lng)
        prev_lat, prev_lng = lat, lng
    return out.decode("ascii")