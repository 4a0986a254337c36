"""Place photos and Find Place From Text requests."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, BinaryIO, Mapping, Sequence, Union

from PIL import Image

from mapservices.errors import MapsError
from mapservices.latlng import LatLng
from mapservices.places_search import PlacesSearchResult

_ACCEPTED_STATUSES = ("OK", "ZERO_RESULTS")
_FORBIDDEN = 403


def _text(value: Union[str, Enum]) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


@dataclass
class PlacePhotoRequest:
    """Parameters of a place photo request; one of the sizes is required."""

    photo_reference: str = ""
    max_height: int = 0
    max_width: int = 0

    def validate(self) -> None:
        """Raise MapsError when the reference or both sizes are missing."""
        if not self.photo_reference:
            raise MapsError("maps: PhotoReference missing")
        if self.max_height == 0 and self.max_width == 0:
            raise MapsError("maps: both MaxHeight & MaxWidth missing")

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters of this request."""
        query: dict[str, list[str]] = {"photoreference": [self.photo_reference]}
        if self.max_height > 0:
            query["maxheight"] = [str(self.max_height)]
        if self.max_width > 0:
            query["maxwidth"] = [str(self.max_width)]
        return query


@dataclass
class PlacePhotoResponse:
    """The image data returned for a photo request, as bytes or a binary stream."""

    content_type: str = ""
    data: Union[bytes, BinaryIO] = b""

    def image(self) -> Image.Image:
        """Decode the data as a JPEG image, closing a stream once read."""
        try:
            if self.content_type != "image/jpeg":
                raise MapsError("Image of unknown format: " + self.content_type)
            raw = self.data if isinstance(self.data, (bytes, bytearray)) else self.data.read()
            try:
                img = Image.open(io.BytesIO(raw))
                img.load()
            except (OSError, ValueError) as exc:
                raise MapsError(f"maps: cannot decode image: {exc}") from exc
            return img
        finally:
            close = getattr(self.data, "close", None)
            if close is not None:
                close()


def check_photo_status(status_code: int) -> None:
    """Raise MapsError when the photo service refused the request for quota."""
    if status_code == _FORBIDDEN:
        raise MapsError("maps: request exceeds your available quota")


class FindPlaceFromTextInputType(str, Enum):
    """The kind of text given to Find Place From Text."""

    TEXT_QUERY = "textquery"
    PHONE_NUMBER = "phonenumber"


class FindPlaceFromTextLocationBiasType(str, Enum):
    """How results are biased towards a location."""

    IP = "ipbias"
    POINT = "point"
    CIRCULAR = "circle"
    RECTANGULAR = "rectangle"


def parse_location_bias_type(location_bias: str) -> FindPlaceFromTextLocationBiasType:
    """Parse a location bias name, ignoring case."""
    try:
        return FindPlaceFromTextLocationBiasType(location_bias.lower())
    except ValueError:
        raise MapsError(
            f'Unknown FindPlaceFromTextLocationBiasType "{location_bias}"'
        ) from None


@dataclass
class FindPlaceFromTextRequest:
    """Parameters of a Find Place From Text request.

    The location bias fields used depend on ``location_bias``: a point,
    a centre and radius, or south-west and north-east corners.
    """

    input: str = ""
    input_type: Union[FindPlaceFromTextInputType, str] = ""
    fields: Sequence[Union[str, Enum]] = field(default_factory=list)
    language: str = ""
    location_bias: Union[FindPlaceFromTextLocationBiasType, str] = ""
    location_bias_point: LatLng | None = None
    location_bias_center: LatLng | None = None
    location_bias_radius: int = 0
    location_bias_south_west: LatLng | None = None
    location_bias_north_east: LatLng | None = None

    def _bias(self) -> FindPlaceFromTextLocationBiasType | None:
        text = _text(self.location_bias)
        if not text:
            return None
        try:
            return FindPlaceFromTextLocationBiasType(text)
        except ValueError:
            return None

    def validate(self) -> None:
        """Raise MapsError when required input or location bias fields are missing."""
        if not self.input:
            raise MapsError("maps: Input required")
        if not _text(self.input_type):
            raise MapsError("maps: InputType required")
        bias = self._bias()
        if bias is FindPlaceFromTextLocationBiasType.POINT:
            if self.location_bias_point is None:
                raise MapsError(
                    "maps: LocationBiasPoint required when LocationBias set to "
                    "FindPlaceFromTextLocationBiasPoint"
                )
        elif bias is FindPlaceFromTextLocationBiasType.CIRCULAR:
            if self.location_bias_center is None or self.location_bias_radius == 0:
                raise MapsError(
                    "maps: LocationBiasCenter and LocationBiasRadius required when "
                    "LocationBias set to FindPlaceFromTextLocationBiasCircle"
                )
        elif bias is FindPlaceFromTextLocationBiasType.RECTANGULAR:
            if self.location_bias_south_west is None or self.location_bias_north_east is None:
                raise MapsError(
                    "maps: LocationBiasSouthWest and LocationBiasNorthEast required when "
                    "LocationBias set to FindPlaceFromTextLocationBiasRectangle"
                )

    def _bias_value(self, bias: FindPlaceFromTextLocationBiasType) -> str:
        if bias is FindPlaceFromTextLocationBiasType.IP:
            return "ipbias"
        self.validate()
        if bias is FindPlaceFromTextLocationBiasType.POINT:
            return f"point:{self.location_bias_point}"
        if bias is FindPlaceFromTextLocationBiasType.CIRCULAR:
            return f"circle:{int(self.location_bias_radius)}@{self.location_bias_center}"
        return f"rectangle:{self.location_bias_south_west}|{self.location_bias_north_east}"

    def params(self) -> dict[str, list[str]]:
        """Return the query parameters; ``input`` and ``inputtype`` are always present."""
        query: dict[str, list[str]] = {
            "input": [self.input],
            "inputtype": [_text(self.input_type)],
        }
        if self.fields:
            query["fields"] = [",".join(_text(item) for item in self.fields)]
        if self.language:
            query["language"] = [self.language]
        bias = self._bias()
        if bias is not None:
            query["locationbias"] = [self._bias_value(bias)]
        return query


@dataclass(frozen=True)
class FindPlaceFromTextResponse:
    """The candidate places found, with attributions."""

    candidates: list[PlacesSearchResult] = field(default_factory=list)
    html_attributions: list[str] = field(default_factory=list)


def parse_find_place_response(
    data: Union[str, bytes, Mapping[str, Any]],
) -> FindPlaceFromTextResponse:
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
    return FindPlaceFromTextResponse(
        candidates=[PlacesSearchResult.from_dict(item) for item in data.get("candidates") or []],
        html_attributions=list(data.get("html_attributions") or []),
    )