# mapservices

Building blocks for working with geocoding, geolocation and places web
services: request objects that check their required fields and turn into
query parameters or JSON bodies, parsers that turn JSON responses into
dataclasses, and standalone helpers for coordinates, encoded polylines, URL
signing and request metrics.

## Installation

```
pip install mapservices
```

Pillow is installed as a dependency; it is used to decode place photos.

## What this package does not do

It does not send requests. There is no HTTP client, no API key handling,
no retries or rate limiting: you build the query parameters or request body
with the classes here, send them with the HTTP library of your choice, and
hand the response body back to the matching `parse_*` function.

## Coordinates

```python
from mapservices.latlng import LatLng, LatLngBounds, parse_latlng, parse_latlng_list

point = parse_latlng("12.34,56.78")
str(point)                      # "12.34,56.78"
point.almost_equal(LatLng(12.34, 56.78), 0.0001)   # True

points = parse_latlng_list("12.34,56.78|14.89,123.89")
len(points)                     # 2
```

`LatLng` prints its coordinates in plain decimal form without an exponent
(see `format_float`). A `LatLngBounds` prints as `southwest|northeast`, the
form used in a `bounds` parameter. Both have `from_dict` for the
`{"lat": ..., "lng": ...}` and `{"northeast": ..., "southwest": ...}`
objects found in responses. Malformed input to the parsers raises
`ValueError`.

## Encoded polylines

```python
from mapservices.polyline import Polyline, decode_polyline, encode

path = decode_polyline("ynkrFq|zfE?sCnBpA")
encode(path)                    # "ynkrFq|zfE?sCnBpA"

Polyline("ynkrFq|zfE?sCnBpA").decode() == path   # True
```

Points are decoded with five decimal places of precision; `encode`
truncates each coordinate to that precision before encoding. A truncated
value at the end of an encoded string is ignored.

## URL signing

```python
from mapservices.signer import encode_query, generate_signature, sign_url

generate_signature(b"secret", "/maps/api/geocode/json?address=Sydney")
encode_query({"b": "2", "a": ["x y", "z"]})   # "a=x+y&a=z&b=2"
```

`generate_signature` returns the URL-safe base64 HMAC-SHA1 digest of the
message. `encode_query` encodes values in sorted key order.
`sign_url(path, signature, values)` signs `path?query` and returns the
encoded query with a `signature` parameter appended.

## Times and durations

`mapservices.timetypes` holds the wire representations of times:

- `DateTime` (`text`, `time_zone`, `value` in seconds since the epoch).
  `DateTime.from_datetime` builds one from a `datetime` (returning `None`
  for `None`), keeping the IANA zone name; `to_datetime` gives back an aware
  `datetime` in that zone when it is known.
- `Duration` (`value` in seconds, `text`). `Duration.from_timedelta` and
  `to_timedelta` convert to and from `timedelta`; `format_duration` gives
  the compact text form such as `2m13s`, `1.5ms` or `0s`.
- `Location`, a point with `latitude` and `longitude` fields.

## Services

Each service has request classes and a parser for its JSON response. The
parsers accept a `str`, `bytes` or an already decoded mapping.

- `mapservices.geocoding`: `GeocodingRequest` with `validate_geocode`,
  `validate_reverse` and `params`, and the `GeocodeAccuracy` enum.
  `parse_geocoding_response` returns a `GeocodingResponse` of
  `GeocodingResult` objects; a reverse geocoding `address_descriptor` is kept
  as the mapping the service sent.
- `mapservices.geolocation`: `GeolocationRequest` built from `CellTower` and
  `WiFiAccessPoint` entries, with `to_dict` and `to_json` for the POST body
  (zero fields are left out, `considerIp` is always present).
  `parse_geolocation_response` returns a `GeolocationResult`, or raises with
  the service's message when the body carries an error.
- `mapservices.places_search`: `NearbySearchRequest` and
  `TextSearchRequest`, each with `validate` and `params`;
  `parse_places_search_response` returns a `PlacesSearchResponse`.
- `mapservices.places_autocomplete`: `QueryAutocompleteRequest`,
  `PlaceAutocompleteRequest` and `new_session_token()`;
  `parse_autocomplete_response` returns an `AutocompleteResponse`.
- `mapservices.places_details`: `PlaceDetailsRequest`;
  `parse_place_details_response` returns a `PlaceDetailsResult` carrying the
  response's HTML attributions.
- `mapservices.places_find`: `FindPlaceFromTextRequest`,
  `parse_location_bias_type` and `parse_find_place_response`, plus
  `PlacePhotoRequest`, `check_photo_status` and `PlacePhotoResponse.image()`
  for place photos. `image()` decodes JPEG data only and closes a stream
  once it has been read.

Opening hours, photos and editorial summaries in place results are kept as
the mappings the service sent.

```python
from mapservices.geocoding import GeocodingRequest, parse_geocoding_response

request = GeocodingRequest(address="Santa Cruz", region="es")
request.validate_geocode()
request.params()   # {"address": ["Santa Cruz"], "region": ["es"]}

response = parse_geocoding_response('{"results": [], "status": "ZERO_RESULTS"}')
response.results   # []
```

Request classes raise `mapservices.errors.MapsError` when required fields
are missing. Responses whose `status` is anything other than `OK` or
`ZERO_RESULTS` raise `MapsError` too, with the status and any
`error_message`; `ZERO_RESULTS` gives an empty result list.

## Metrics

```python
from mapservices.metrics import StatsReporter

reporter = StatsReporter()
reporter.register_views()

request = reporter.new_request("geocode")
request.end_request(None, 200, "")

reporter.retrieve_data("maps.googleapis.com/client/count")
```

`StatsReporter` records, per combination of request name, error text, HTTP
status code and metro area, a count view and a latency view with a
millisecond distribution. Data is recorded only after `register_views()`;
`retrieve_data` returns `ViewRow` snapshots and raises `KeyError` for a
view that is not registered. `NoOpReporter` discards everything. Both
derive from the abstract `Reporter`.