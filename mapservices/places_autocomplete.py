"""Query and place autocomplete requests and their predictions."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from mapservices.errors import MapsError
from mapservices.latlng import LatLng

_ACCEPTED_STATUSES = ("OK", "ZERO_RESULTS")
_NIL_TOKEN = uuid.UUID(int=0)


def new_session_token() -> uuid.UUID:
    """Return a new random session token for a Place Autocomplete session."""
    return uuid.uuid4()


def _text(value: Union[str, Enum]) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


def _require_input(text: str) -> None:
    if not text:
        raise MapsError("maps: Input missing")


@dataclass
class QueryAutocompleteRequest:
    """Parameters of a query autocomplete request."""

    input: str = ""
    offset: int = 0
    location: LatLng | None = None
    radius: int = 0
    language: str = ""

    def validate(self) -> None:
        """Raise MapsError when the input text is missing."""
        _require_input(self.input)

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request."""
        query: dict[str, list[str]] = {"input": [self.input]}
        if self.offset > 0:
            query["offset"] = [str(self.offset)]
        if self.location is not None:
            query["location"] = [str(self.location)]
        if self.radius > 0:
            query["radius"] = [str(self.radius)]
        if self.language:
            query["language"] = [self.language]
        return query


@dataclass
class PlaceAutocompleteRequest:
    """Parameters of a place autocomplete request.

    ``components`` maps a component name such as ``country`` to the values
    the results are restricted to. A ``session_token`` of ``None`` or the
    nil UUID is left out of the request.
    """

    input: str = ""
    offset: int = 0
    location: LatLng | None = None
    origin: LatLng | None = None
    radius: int = 0
    language: str = ""
    types: Union[str, Enum] = ""
    components: Mapping[str, Sequence[str]] = field(default_factory=dict)
    strict_bounds: bool = False
    session_token: uuid.UUID | None = None

    def validate(self) -> None:
        """Raise MapsError when the input text is missing."""
        _require_input(self.input)

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request."""
        query: dict[str, list[str]] = {"input": [self.input]}
        if self.session_token is not None and self.session_token != _NIL_TOKEN:
            query["sessiontoken"] = [str(self.session_token)]
        if self.offset > 0:
            query["offset"] = [str(self.offset)]
        if self.location is not None:
            query["location"] = [str(self.location)]
        if self.origin is not None:
            query["origin"] = [str(self.origin)]
        if self.radius > 0:
            query["radius"] = [str(self.radius)]
        if self.language:
            query["language"] = [self.language]
        if _text(self.types):
            query["types"] = [_text(self.types)]
        if self.strict_bounds:
            query["strictbounds"] = ["true"]
        groups = [
            "|".join(f"{name}:{value}" for value in values)
            for name, values in self.components.items()
        ]
        if groups:
            query["components"] = ["|".join(groups)]
        return query


@dataclass(frozen=True)
class AutocompleteMatchedSubstring:
    """Where the entered term matched in a prediction's text."""

    length: int = 0
    offset: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AutocompleteMatchedSubstring:
        data = data or {}
        return cls(length=int(data.get("length", 0)), offset=int(data.get("offset", 0)))


@dataclass(frozen=True)
class AutocompleteTermOffset:
    """One section of a prediction's description and where it starts."""

    value: str = ""
    offset: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AutocompleteTermOffset:
        data = data or {}
        return cls(value=data.get("value", ""), offset=int(data.get("offset", 0)))


@dataclass(frozen=True)
class AutocompleteStructuredFormatting:
    """The main and secondary text of a prediction."""

    main_text: str = ""
    main_text_matched_substrings: list[AutocompleteMatchedSubstring] = field(
        default_factory=list
    )
    secondary_text: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AutocompleteStructuredFormatting:
        data = data or {}
        return cls(
            main_text=data.get("main_text", ""),
            main_text_matched_substrings=[
                AutocompleteMatchedSubstring.from_dict(item)
                for item in data.get("main_text_matched_substrings") or []
            ],
            secondary_text=data.get("secondary_text", ""),
        )


@dataclass(frozen=True)
class AutocompletePrediction:
    """A single autocomplete prediction."""

    description: str = ""
    distance_meters: int = 0
    place_id: str = ""
    types: list[str] = field(default_factory=list)
    matched_substrings: list[AutocompleteMatchedSubstring] = field(default_factory=list)
    terms: list[AutocompleteTermOffset] = field(default_factory=list)
    structured_formatting: AutocompleteStructuredFormatting = field(
        default_factory=AutocompleteStructuredFormatting
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AutocompletePrediction:
        data = data or {}
        return cls(
            description=data.get("description", ""),
            distance_meters=int(data.get("distance_meters", 0)),
            place_id=data.get("place_id", ""),
            types=list(data.get("types") or []),
            matched_substrings=[
                AutocompleteMatchedSubstring.from_dict(item)
                for item in data.get("matched_substrings") or []
            ],
            terms=[AutocompleteTermOffset.from_dict(item) for item in data.get("terms") or []],
            structured_formatting=AutocompleteStructuredFormatting.from_dict(
                data.get("structured_formatting")
            ),
        )


@dataclass(frozen=True)
class AutocompleteResponse:
    """The predictions returned for an autocomplete request."""

    predictions: list[AutocompletePrediction] = field(default_factory=list)


def parse_autocomplete_response(
    data: Union[str, bytes, Mapping[str, Any]],
) -> AutocompleteResponse:
    """Build a response from the service's JSON, raising on a failure status."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise MapsError(f"maps: invalid response: {exc}") from exc
    if not isinstance(data, Mapping):
        raise MapsError("maps: invalid response: expected a JSON object")
    status = data.get("status", "")
    if status not in _ACCEPTED_STATUSES:
        message = data.get("error_message", "")
        text = f"maps: {status}"
        if message:
            text = f"{text} - {message}"
        raise MapsError(text)
    return AutocompleteResponse(
        predictions=[
            AutocompletePrediction.from_dict(item) for item in data.get("predictions") or []
        ]
    )