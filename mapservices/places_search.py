"""Nearby and text searches for places, and the results they return."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from mapservices.errors import MapsError
from mapservices.geocoding import AddressGeometry
from mapservices.latlng import LatLng

RANK_BY_PROMINENCE = "prominence"
RANK_BY_DISTANCE = "distance"

_ACCEPTED_STATUSES = ("OK", "ZERO_RESULTS")


def _text(value: Union[str, Enum]) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


def _load_object(data: Union[str, bytes, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise MapsError(f"maps: invalid response: {exc}") from exc
    if not isinstance(data, Mapping):
        raise MapsError("maps: invalid response: expected a JSON object")
    return data


def _check_status(data: Mapping[str, Any]) -> None:
    status = data.get("status", "")
    if status in _ACCEPTED_STATUSES:
        return
    message = data.get("error_message", "")
    text = f"maps: {status}"
    if message:
        text = f"{text} - {message}"
    raise MapsError(text)


@dataclass
class NearbySearchRequest:
    """Parameters of a search for places within an area.

    ``rank_by`` is ``"prominence"``, ``"distance"`` or empty. Price levels
    and the place type are passed as their text values.
    """

    location: LatLng | None = None
    radius: int = 0
    keyword: str = ""
    language: str = ""
    min_price: Union[str, Enum] = ""
    max_price: Union[str, Enum] = ""
    name: str = ""
    open_now: bool = False
    rank_by: Union[str, Enum] = ""
    type: Union[str, Enum] = ""
    page_token: str = ""

    def validate(self) -> None:
        """Raise MapsError when the request cannot be sent as it stands."""
        if self.page_token:
            return
        if self.location is None:
            raise MapsError("maps: Location and PageToken both missing")
        by_distance = _text(self.rank_by) == RANK_BY_DISTANCE
        if self.radius == 0 and not by_distance:
            raise MapsError("maps: Radius and PageToken both missing")
        if self.radius > 0 and by_distance:
            raise MapsError("maps: Radius specified with RankByDistance")
        if by_distance and not self.keyword and not self.name and not _text(self.type):
            raise MapsError("maps: RankBy=distance and Keyword, Name and Type are missing")

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request."""
        query: dict[str, list[str]] = {}
        if self.location is not None:
            query["location"] = [str(self.location)]
        if self.radius != 0:
            query["radius"] = [str(self.radius)]
        if self.keyword:
            query["keyword"] = [self.keyword]
        if self.language:
            query["language"] = [self.language]
        if _text(self.min_price):
            query["minprice"] = [_text(self.min_price)]
        if _text(self.max_price):
            query["maxprice"] = [_text(self.max_price)]
        if self.name:
            query["name"] = [self.name]
        if self.open_now:
            query["opennow"] = ["true"]
        if _text(self.rank_by):
            query["rankby"] = [_text(self.rank_by)]
        if _text(self.type):
            query["type"] = [_text(self.type)]
        if self.page_token:
            query["pagetoken"] = [self.page_token]
        return query


@dataclass
class TextSearchRequest:
    """Parameters of a search for places matching a text query."""

    query: str = ""
    location: LatLng | None = None
    radius: int = 0
    language: str = ""
    min_price: Union[str, Enum] = ""
    max_price: Union[str, Enum] = ""
    open_now: bool = False
    type: Union[str, Enum] = ""
    page_token: str = ""
    region: str = ""

    def validate(self) -> None:
        """Raise MapsError when the request cannot be sent as it stands."""
        if not self.query and not self.page_token and not _text(self.type):
            raise MapsError("maps: Query, PageToken and Type are all missing")
        if self.location is not None and self.radius == 0:
            raise MapsError("maps: Radius missing, required with Location")

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request; ``query`` is always present."""
        query: dict[str, list[str]] = {"query": [self.query]}
        if self.location is not None:
            query["location"] = [str(self.location)]
        if self.radius != 0:
            query["radius"] = [str(self.radius)]
        if self.language:
            query["language"] = [self.language]
        if _text(self.min_price):
            query["minprice"] = [_text(self.min_price)]
        if _text(self.max_price):
            query["maxprice"] = [_text(self.max_price)]
        if self.open_now:
            query["opennow"] = ["true"]
        if _text(self.type):
            query["type"] = [_text(self.type)]
        if self.page_token:
            query["pagetoken"] = [self.page_token]
        if self.region:
            query["region"] = [self.region]
        return query


@dataclass(frozen=True)
class PlacesSearchResult:
    """One place found by a search.

    ``opening_hours`` and ``photos`` hold the objects as sent by the service.
    """

    formatted_address: str = ""
    geometry: AddressGeometry = field(default_factory=AddressGeometry)
    name: str = ""
    icon: str = ""
    place_id: str = ""
    rating: float = 0.0
    user_ratings_total: int = 0
    types: list[str] = field(default_factory=list)
    opening_hours: dict[str, Any] | None = None
    photos: list[dict[str, Any]] = field(default_factory=list)
    price_level: int = 0
    vicinity: str = ""
    permanently_closed: bool = False
    business_status: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PlacesSearchResult:
        data = data or {}
        hours = data.get("opening_hours")
        return cls(
            formatted_address=data.get("formatted_address", ""),
            geometry=AddressGeometry.from_dict(data.get("geometry")),
            name=data.get("name", ""),
            icon=data.get("icon", ""),
            place_id=data.get("place_id", ""),
            rating=float(data.get("rating", 0.0)),
            user_ratings_total=int(data.get("user_ratings_total", 0)),
            types=list(data.get("types") or []),
            opening_hours=dict(hours) if hours is not None else None,
            photos=[dict(photo) for photo in data.get("photos") or []],
            price_level=int(data.get("price_level", 0)),
            vicinity=data.get("vicinity", ""),
            permanently_closed=bool(data.get("permanently_closed", False)),
            business_status=data.get("business_status", ""),
            id=data.get("id", ""),
        )


@dataclass(frozen=True)
class PlacesSearchResponse:
    """The places found by a search, with attributions and a paging token."""

    results: list[PlacesSearchResult] = field(default_factory=list)
    html_attributions: list[str] = field(default_factory=list)
    next_page_token: str = ""


def parse_places_search_response(
    data: Union[str, bytes, Mapping[str, Any]],
) -> PlacesSearchResponse:
    """Build a response from the service's JSON, raising on a failure status."""
    obj = _load_object(data)
    _check_status(obj)
    return PlacesSearchResponse(
        results=[PlacesSearchResult.from_dict(item) for item in obj.get("results") or []],
        html_attributions=list(obj.get("html_attributions") or []),
        next_page_token=obj.get("next_page_token", ""),
    )