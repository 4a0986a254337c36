"""Place Details requests and the detailed place records they return."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from mapservices.errors import MapsError
from mapservices.geocoding import AddressComponent, AddressGeometry

_ACCEPTED_STATUSES = ("OK", "ZERO_RESULTS")
_NIL_TOKEN = uuid.UUID(int=0)


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


def _optional_dict(value: Any) -> dict[str, Any] | None:
    return dict(value) if value is not None else None


@dataclass
class PlaceDetailsRequest:
    """Parameters of a Place Details request.

    ``fields`` names the parts of the result to fill in, as text or enum
    values. A ``session_token`` of ``None`` or the nil UUID is left out.
    """

    place_id: str = ""
    language: str = ""
    fields: Sequence[Union[str, Enum]] = field(default_factory=list)
    session_token: uuid.UUID | None = None
    region: str = ""
    reviews_no_translations: bool = False
    reviews_sort: str = ""

    def validate(self) -> None:
        """Raise MapsError when the place id is missing."""
        if not self.place_id:
            raise MapsError("maps: PlaceID missing")

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request; ``placeid`` is always present."""
        query: dict[str, list[str]] = {"placeid": [self.place_id]}
        if self.language:
            query["language"] = [self.language]
        if self.fields:
            query["fields"] = [",".join(_text(item) for item in self.fields)]
        if self.session_token is not None and self.session_token != _NIL_TOKEN:
            query["sessiontoken"] = [str(self.session_token)]
        if self.region:
            query["region"] = [self.region]
        if self.reviews_no_translations:
            query["reviews_no_translations"] = ["true"]
        if self.reviews_sort:
            query["reviews_sort"] = [self.reviews_sort]
        return query


@dataclass(frozen=True)
class PlaceReviewAspect:
    """A rating of one attribute of a place, from 0 to 3."""

    rating: int = 0
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PlaceReviewAspect:
        data = data or {}
        return cls(rating=int(data.get("rating", 0)), type=data.get("type", ""))


@dataclass(frozen=True)
class PlaceReview:
    """A user's review of a place; ``time`` is seconds since the epoch."""

    aspects: list[PlaceReviewAspect] = field(default_factory=list)
    author_name: str = ""
    author_url: str = ""
    author_profile_photo: str = ""
    language: str = ""
    rating: int = 0
    relative_time_description: str = ""
    text: str = ""
    time: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PlaceReview:
        data = data or {}
        return cls(
            aspects=[PlaceReviewAspect.from_dict(item) for item in data.get("aspects") or []],
            author_name=data.get("author_name", ""),
            author_url=data.get("author_url", ""),
            author_profile_photo=data.get("profile_photo_url", ""),
            language=data.get("language", ""),
            rating=int(data.get("rating", 0)),
            relative_time_description=data.get("relative_time_description", ""),
            text=data.get("text", ""),
            time=int(data.get("time", 0)),
        )


@dataclass(frozen=True)
class PlaceDetailsResult:
    """The details of one place.

    Opening hours, editorial summary and photos hold the objects as sent
    by the service. ``utc_offset`` is in minutes, or ``None`` when absent.
    """

    address_components: list[AddressComponent] = field(default_factory=list)
    formatted_address: str = ""
    adr_address: str = ""
    business_status: str = ""
    curbside_pickup: bool = False
    delivery: bool = False
    dine_in: bool = False
    editorial_summary: dict[str, Any] | None = None
    formatted_phone_number: str = ""
    international_phone_number: str = ""
    geometry: AddressGeometry = field(default_factory=AddressGeometry)
    icon: str = ""
    name: str = ""
    opening_hours: dict[str, Any] | None = None
    current_opening_hours: dict[str, Any] | None = None
    secondary_opening_hours: list[dict[str, Any]] = field(default_factory=list)
    permanently_closed: bool = False
    photos: list[dict[str, Any]] = field(default_factory=list)
    place_id: str = ""
    price_level: int = 0
    rating: float = 0.0
    reservable: bool = False
    reviews: list[PlaceReview] = field(default_factory=list)
    serves_beer: bool = False
    serves_breakfast: bool = False
    serves_brunch: bool = False
    serves_dinner: bool = False
    serves_lunch: bool = False
    serves_vegetarian_food: bool = False
    serves_wine: bool = False
    takeout: bool = False
    types: list[str] = field(default_factory=list)
    url: str = ""
    user_ratings_total: int = 0
    utc_offset: int | None = None
    vicinity: str = ""
    website: str = ""
    wheelchair_accessible_entrance: bool = False
    html_attributions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PlaceDetailsResult:
        data = data or {}
        offset = data.get("utc_offset")
        return cls(
            address_components=[
                AddressComponent.from_dict(item) for item in data.get("address_components") or []
            ],
            formatted_address=data.get("formatted_address", ""),
            adr_address=data.get("adr_address", ""),
            business_status=data.get("business_status", ""),
            curbside_pickup=bool(data.get("curbside_pickup", False)),
            delivery=bool(data.get("delivery", False)),
            dine_in=bool(data.get("dine_in", False)),
            editorial_summary=_optional_dict(data.get("editorial_summary")),
            formatted_phone_number=data.get("formatted_phone_number", ""),
            international_phone_number=data.get("international_phone_number", ""),
            geometry=AddressGeometry.from_dict(data.get("geometry")),
            icon=data.get("icon", ""),
            name=data.get("name", ""),
            opening_hours=_optional_dict(data.get("opening_hours")),
            current_opening_hours=_optional_dict(data.get("current_opening_hours")),
            secondary_opening_hours=[
                dict(item) for item in data.get("secondary_opening_hours") or []
            ],
            permanently_closed=bool(data.get("permanently_closed", False)),
            photos=[dict(item) for item in data.get("photos") or []],
            place_id=data.get("place_id", ""),
            price_level=int(data.get("price_level", 0)),
            rating=float(data.get("rating", 0.0)),
            reservable=bool(data.get("reservable", False)),
            reviews=[PlaceReview.from_dict(item) for item in data.get("reviews") or []],
            serves_beer=bool(data.get("serves_beer", False)),
            serves_breakfast=bool(data.get("serves_breakfast", False)),
            serves_brunch=bool(data.get("serves_brunch", False)),
            serves_dinner=bool(data.get("serves_dinner", False)),
            serves_lunch=bool(data.get("serves_lunch", False)),
            serves_vegetarian_food=bool(data.get("serves_vegetarian_food", False)),
            serves_wine=bool(data.get("serves_wine", False)),
            takeout=bool(data.get("takeout", False)),
            types=list(data.get("types") or []),
            url=data.get("url", ""),
            user_ratings_total=int(data.get("user_ratings_total", 0)),
            utc_offset=int(offset) if offset is not None else None,
            vicinity=data.get("vicinity", ""),
            website=data.get("website", ""),
            wheelchair_accessible_entrance=bool(
                data.get("wheelchair_accessible_entrance", False)
            ),
            html_attributions=list(data.get("html_attributions") or []),
        )


def parse_place_details_response(
    data: Union[str, bytes, Mapping[str, Any]],
) -> PlaceDetailsResult:
    """Build the place details from the service's JSON, raising on a failure status.

    The response's top-level attributions are carried into the result.
    """
    obj = _load_object(data)
    _check_status(obj)
    result = dict(obj.get("result") or {})
    result["html_attributions"] = list(obj.get("html_attributions") or [])
    return PlaceDetailsResult.from_dict(result)