import json

import pytest

from mapservices.errors import MapsError
from mapservices.latlng import LatLng
from mapservices.places_search import (
    NearbySearchRequest,
    PlacesSearchResult,
    TextSearchRequest,
    parse_places_search_response,
)

SYDNEY = LatLng(lat=-33.8670522, lng=151.1957362)


def test_nearby_missing_location():
    with pytest.raises(MapsError, match="Location and PageToken both missing"):
        NearbySearchRequest(radius=500).validate()


def test_nearby_missing_radius():
    with pytest.raises(MapsError, match="Radius and PageToken both missing"):
        NearbySearchRequest(location=SYDNEY).validate()


def test_nearby_radius_with_distance_ranking():
    request = NearbySearchRequest(location=SYDNEY, radius=500, rank_by="distance", keyword="pub")
    with pytest.raises(MapsError, match="Radius specified with RankByDistance"):
        request.validate()


def test_nearby_distance_ranking_needs_term():
    with pytest.raises(MapsError, match="Keyword, Name and Type are missing"):
        NearbySearchRequest(location=SYDNEY, rank_by="distance").validate()


def test_nearby_page_token_skips_checks():
    request = NearbySearchRequest(page_token="next")
    request.validate()
    assert request.params() == {"pagetoken": ["next"]}


def test_nearby_params():
    request = NearbySearchRequest(
        location=SYDNEY,
        radius=500,
        keyword="cafe",
        language="en",
        min_price="1",
        max_price="3",
        name="Bean",
        open_now=True,
        type="cafe",
    )
    request.validate()
    assert request.params() == {
        "location": [str(SYDNEY)],
        "radius": ["500"],
        "keyword": ["cafe"],
        "language": ["en"],
        "minprice": ["1"],
        "maxprice": ["3"],
        "name": ["Bean"],
        "opennow": ["true"],
        "type": ["cafe"],
    }


def test_nearby_distance_ranking_params():
    request = NearbySearchRequest(location=SYDNEY, rank_by="distance", name="Bean")
    request.validate()
    params = request.params()
    assert params["rankby"] == ["distance"]
    assert "radius" not in params


def test_text_search_all_missing():
    with pytest.raises(MapsError, match="Query, PageToken and Type are all missing"):
        TextSearchRequest().validate()


def test_text_search_location_needs_radius():
    with pytest.raises(MapsError, match="Radius missing, required with Location"):
        TextSearchRequest(query="pizza", location=SYDNEY).validate()


def test_text_search_query_always_present():
    request = TextSearchRequest(type="restaurant")
    request.validate()
    assert request.params() == {"query": [""], "type": ["restaurant"]}


def test_text_search_params():
    request = TextSearchRequest(
        query="pizza in New York", location=SYDNEY, radius=1000, region="us", open_now=True
    )
    params = request.params()
    assert params["query"] == ["pizza in New York"]
    assert params["radius"] == ["1000"]
    assert params["region"] == ["us"]
    assert params["opennow"] == ["true"]
    assert params["location"] == [str(SYDNEY)]


def test_parse_response():
    body = {
        "html_attributions": ["Listings by example"],
        "next_page_token": "next",
        "results": [
            {
                "name": "Bean Place",
                "place_id": "place-1",
                "rating": 4.5,
                "user_ratings_total": 12,
                "types": ["cafe"],
                "geometry": {"location": {"lat": -33.86, "lng": 151.19}},
                "opening_hours": {"open_now": True},
                "photos": [{"photo_reference": "ref-1"}],
                "price_level": 2,
            }
        ],
        "status": "OK",
    }
    response = parse_places_search_response(json.dumps(body))
    assert response.html_attributions == ["Listings by example"]
    assert response.next_page_token == "next"
    result = response.results[0]
    assert result.name == "Bean Place"
    assert result.rating == 4.5
    assert result.user_ratings_total == 12
    assert result.geometry.location == LatLng(-33.86, 151.19)
    assert result.opening_hours == {"open_now": True}
    assert result.photos == [{"photo_reference": "ref-1"}]
    assert result.price_level == 2


def test_parse_zero_results():
    response = parse_places_search_response('{"results": [], "status": "ZERO_RESULTS"}')
    assert response.results == []
    assert response.next_page_token == ""


def test_parse_error_status():
    with pytest.raises(MapsError, match="REQUEST_DENIED"):
        parse_places_search_response({"status": "REQUEST_DENIED", "error_message": "denied"})


def test_parse_invalid_json():
    with pytest.raises(MapsError):
        parse_places_search_response("{not json")


def test_result_defaults_from_empty():
    result = PlacesSearchResult.from_dict({})
    assert result.opening_hours is None
    assert result.photos == []
    assert result == PlacesSearchResult()