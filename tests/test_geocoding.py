import json

import pytest

from mapservices.errors import MapsError
from mapservices.geocoding import (
    AddressComponent,
    AddressGeometry,
    AddressPlusCode,
    GeocodeAccuracy,
    GeocodingRequest,
    GeocodingResult,
    parse_geocoding_response,
)
from mapservices.latlng import LatLng, LatLngBounds
from mapservices.signer import encode_query

HQ_COMPONENTS = [
    {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
    {"long_name": "Amphitheatre Pkwy", "short_name": "Amphitheatre Pkwy", "types": ["route"]},
    {"long_name": "Mountain View", "short_name": "Mountain View", "types": ["locality", "political"]},
    {
        "long_name": "Santa Clara County",
        "short_name": "Santa Clara County",
        "types": ["administrative_area_level_2", "political"],
    },
    {"long_name": "California", "short_name": "CA", "types": ["administrative_area_level_1", "political"]},
    {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
    {"long_name": "94043", "short_name": "94043", "types": ["postal_code"]},
]

HQ_BOUNDS = {
    "northeast": {"lat": 37.4238253802915, "lng": -122.0829009197085},
    "southwest": {"lat": 37.4211274197085, "lng": -122.0855988802915},
}

EXPECTED_HQ_COMPONENTS = [
    AddressComponent("1600", "1600", ["street_number"]),
    AddressComponent("Amphitheatre Pkwy", "Amphitheatre Pkwy", ["route"]),
    AddressComponent("Mountain View", "Mountain View", ["locality", "political"]),
    AddressComponent("Santa Clara County", "Santa Clara County", ["administrative_area_level_2", "political"]),
    AddressComponent("California", "CA", ["administrative_area_level_1", "political"]),
    AddressComponent("United States", "US", ["country", "political"]),
    AddressComponent("94043", "94043", ["postal_code"]),
]

EXPECTED_HQ_BOUNDS = LatLngBounds(
    north_east=LatLng(37.4238253802915, -122.0829009197085),
    south_west=LatLng(37.4211274197085, -122.0855988802915),
)


def test_geocoding_google_hq():
    response = json.dumps(
        {
            "results": [
                {
                    "address_components": HQ_COMPONENTS,
                    "formatted_address": "1600 Amphitheatre Parkway, Mountain View, CA 94043, USA",
                    "geometry": {
                        "location": {"lat": 37.4224764, "lng": -122.0842499},
                        "bounds": HQ_BOUNDS,
                        "location_type": "ROOFTOP",
                        "viewport": HQ_BOUNDS,
                    },
                    "partial_math": False,
                    "place_id": "ChIJ2eUgeAK6j4ARbn5u_wAGqWA",
                    "types": ["street_address"],
                }
            ],
            "status": "OK",
        }
    )
    request = GeocodingRequest(address="1600 Amphitheatre Parkway, Mountain View, CA")
    request.validate_geocode()

    resp = parse_geocoding_response(response)

    assert len(resp.results) == 1
    assert resp.results[0] == GeocodingResult(
        address_components=EXPECTED_HQ_COMPONENTS,
        formatted_address="1600 Amphitheatre Parkway, Mountain View, CA 94043, USA",
        geometry=AddressGeometry(
            location=LatLng(37.4224764, -122.0842499),
            location_type="ROOFTOP",
            bounds=EXPECTED_HQ_BOUNDS,
            viewport=EXPECTED_HQ_BOUNDS,
        ),
        types=["street_address"],
        place_id="ChIJ2eUgeAK6j4ARbn5u_wAGqWA",
        partial_match=False,
    )
    assert resp.address_descriptor == {}


def test_reverse_geocoding():
    bounds = {
        "northeast": {"lat": 40.7155809802915, "lng": -73.9599399197085},
        "southwest": {"lat": 40.7128830197085, "lng": -73.96263788029151},
    }
    response = {
        "results": [
            {
                "address_components": [
                    {"long_name": "277", "short_name": "277", "types": ["street_number"]},
                    {"long_name": "Bedford Avenue", "short_name": "Bedford Ave", "types": ["route"]},
                    {"long_name": "Williamsburg", "short_name": "Williamsburg", "types": ["neighborhood", "political"]},
                    {"long_name": "Brooklyn", "short_name": "Brooklyn", "types": ["sublocality", "political"]},
                    {"long_name": "Kings", "short_name": "Kings", "types": ["administrative_area_level_2", "political"]},
                    {"long_name": "New York", "short_name": "NY", "types": ["administrative_area_level_1", "political"]},
                    {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
                    {"long_name": "11211", "short_name": "11211", "types": ["postal_code"]},
                ],
                "formatted_address": "277 Bedford Avenue, Brooklyn, NY 11211, USA",
                "geometry": {
                    "location": {"lat": 40.714232, "lng": -73.9612889},
                    "bounds": bounds,
                    "location_type": "ROOFTOP",
                    "viewport": bounds,
                },
                "place_id": "ChIJd8BlQ2BZwokRAFUEcm_qrcA",
                "types": ["street_address"],
            }
        ],
        "status": "OK",
    }
    request = GeocodingRequest(latlng=LatLng(40.714224, -73.961452))
    request.validate_reverse()

    resp = parse_geocoding_response(response)

    expected_bounds = LatLngBounds(
        north_east=LatLng(40.7155809802915, -73.9599399197085),
        south_west=LatLng(40.7128830197085, -73.96263788029151),
    )
    assert resp.results == [
        GeocodingResult(
            address_components=[
                AddressComponent("277", "277", ["street_number"]),
                AddressComponent("Bedford Avenue", "Bedford Ave", ["route"]),
                AddressComponent("Williamsburg", "Williamsburg", ["neighborhood", "political"]),
                AddressComponent("Brooklyn", "Brooklyn", ["sublocality", "political"]),
                AddressComponent("Kings", "Kings", ["administrative_area_level_2", "political"]),
                AddressComponent("New York", "NY", ["administrative_area_level_1", "political"]),
                AddressComponent("United States", "US", ["country", "political"]),
                AddressComponent("11211", "11211", ["postal_code"]),
            ],
            formatted_address="277 Bedford Avenue, Brooklyn, NY 11211, USA",
            geometry=AddressGeometry(
                location=LatLng(40.714232, -73.9612889),
                location_type="ROOFTOP",
                bounds=expected_bounds,
                viewport=expected_bounds,
            ),
            types=["street_address"],
            place_id="ChIJd8BlQ2BZwokRAFUEcm_qrcA",
        )
    ]


def test_geocoding_empty_request():
    with pytest.raises(MapsError, match="all missing"):
        GeocodingRequest().validate_geocode()


def test_reverse_geocoding_empty_request():
    with pytest.raises(MapsError, match="both missing"):
        GeocodingRequest().validate_reverse()


def test_geocoding_failing_server():
    with pytest.raises(MapsError, match="ERROR"):
        parse_geocoding_response('{"status" : "ERROR"}')


def test_failure_includes_error_message():
    with pytest.raises(MapsError) as info:
        parse_geocoding_response({"status": "REQUEST_DENIED", "error_message": "denied"})
    assert str(info.value) == "maps: REQUEST_DENIED - denied"


def test_invalid_json_raises():
    with pytest.raises(MapsError):
        parse_geocoding_response("{not json")


def test_geocoding_request_url():
    request = GeocodingRequest(
        address="Santa Cruz",
        bounds=LatLngBounds(LatLng(34.172684, -118.604794), LatLng(34.236144, -118.500938)),
        region="es",
        result_type=["country"],
        location_type=[GeocodeAccuracy.APPROXIMATE],
        components={"country": "ES"},
        language="es",
    )
    assert encode_query(request.params()) == (
        "address=Santa+Cruz&bounds=34.236144%2C-118.500938%7C34.172684%2C-118.604794"
        "&components=country%3AES&language=es&location_type=APPROXIMATE"
        "&region=es&result_type=country"
    )


def test_reverse_params_with_latlng_and_descriptor():
    request = GeocodingRequest(
        latlng=LatLng(40.714224, -73.961452),
        place_id="abc",
        enable_address_descriptor=True,
        location_type=["ROOFTOP", GeocodeAccuracy.GEOMETRIC_CENTER],
    )
    assert request.params() == {
        "latlng": ["40.714224,-73.961452"],
        "location_type": ["ROOFTOP|GEOMETRIC_CENTER"],
        "place_id": ["abc"],
        "enable_address_descriptor": ["true"],
    }


def test_invalid_location_type_rejected():
    request = GeocodingRequest(address="x", location_type=["NOWHERE"])
    with pytest.raises(ValueError):
        request.params()


def test_reverse_geocoding_place_id():
    response = {
        "results": [
            {
                "address_components": HQ_COMPONENTS,
                "formatted_address": "1600 Amphitheatre Parkway, Mountain View, CA 94043, USA",
                "geometry": {
                    "location": {"lat": 37.4224764, "lng": -122.0842499},
                    "location_type": "ROOFTOP",
                    "viewport": HQ_BOUNDS,
                },
                "place_id": "ChIJ2eUgeAK6j4ARbn5u_wAGqWA",
                "types": ["street_address"],
            }
        ],
        "address_descriptor": {
            "landmarks": [
                {
                    "place_id": "ChIJvUbrwCCoAWARX2QiHCsn5A4",
                    "display_name": {"text": "Kinkaku-ji", "language_code": "en"},
                    "types": ["establishment", "place_of_worship", "point_of_interest", "tourist_attraction"],
                    "spatial_relationship": "NEAR",
                    "straight_line_distance_meters": 0.009104185,
                },
                {
                    "place_id": "ChIJj69vLCapAWAR0FBBPEfPeAQ",
                    "display_name": {"text": "鹿苑寺（金閣寺）", "language_code": "ja"},
                    "types": ["establishment", "place_of_worship", "point_of_interest"],
                    "spatial_relationship": "WITHIN",
                    "straight_line_distance_meters": 32.30453,
                },
            ],
            "areas": [
                {
                    "place_id": "ChIJe9XMwiCoAWARVrQpOsYqdBE",
                    "display_name": {"text": "Kinkakujicho", "language_code": "en"},
                    "containment": "WITHIN",
                },
                {
                    "place_id": "ChIJk-6T5COoAWARa-KMWGWzrwQ",
                    "display_name": {"text": "Kinkaku-ji", "language_code": "en"},
                    "containment": "OUTSKIRTS",
                },
            ],
        },
        "status": "OK",
    }
    request = GeocodingRequest(place_id="ChIJ2eUgeAK6j4ARbn5u_wAGqWA")
    request.validate_reverse()

    resp = parse_geocoding_response(json.dumps(response, ensure_ascii=False))

    assert len(resp.results) == 1
    result = resp.results[0]
    assert result.address_components == EXPECTED_HQ_COMPONENTS
    assert result.geometry == AddressGeometry(
        location=LatLng(37.4224764, -122.0842499),
        location_type="ROOFTOP",
        viewport=EXPECTED_HQ_BOUNDS,
    )
    assert result.geometry.bounds == LatLngBounds()
    landmarks = resp.address_descriptor["landmarks"]
    assert landmarks[0]["spatial_relationship"] == "NEAR"
    assert landmarks[0]["straight_line_distance_meters"] == 0.009104185
    assert landmarks[1]["display_name"] == {"text": "鹿苑寺（金閣寺）", "language_code": "ja"}
    assert [area["containment"] for area in resp.address_descriptor["areas"]] == ["WITHIN", "OUTSKIRTS"]


def test_custom_pass_through_geocoding_url():
    request = GeocodingRequest(
        address="1600 Amphitheatre Parkway, Mountain View, CA",
        custom={"new_forward_geocoder": ["true"]},
    )
    assert encode_query(request.params()) == (
        "address=1600+Amphitheatre+Parkway%2C+Mountain+View%2C+CA&new_forward_geocoder=true"
    )


def test_custom_is_overridden_by_fields():
    request = GeocodingRequest(address="Here", custom={"address": "There", "extra": "1"})
    assert request.params() == {"address": ["Here"], "extra": ["1"]}


@pytest.mark.parametrize("status", ["ZERO_RESULTS", "OK"])
def test_geocoding_zero_results(status):
    resp = parse_geocoding_response(f'{{"results" : [], "status" : "{status}"}}')
    assert resp.results == []


def test_plus_code_and_partial_match():
    result = GeocodingResult.from_dict(
        {
            "partial_match": True,
            "plus_code": {"global_code": "849VCWC8+R9", "compound_code": "CWC8+R9, Mountain View, CA, USA"},
        }
    )
    assert result.partial_match is True
    assert result.plus_code == AddressPlusCode("849VCWC8+R9", "CWC8+R9, Mountain View, CA, USA")