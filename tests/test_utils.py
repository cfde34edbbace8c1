import gpxpy
import pytest

from models import Coordinate, RouteOptions, RouteResult
from utils import (
    assess_route_quality,
    build_gmaps_url,
    calculate_centroid,
    calculate_distance,
    calculate_total_distance,
    create_gpx,
    estimate_route_time,
    format_coordinate,
    format_time,
    get_category_display_text,
    order_places_by_proximity,
    place_token,
)


def test_distance_to_itself_is_zero():
    p = Coordinate(59.3293, 18.0686)
    assert calculate_distance(p, p) == 0


def test_distance_is_symmetric():
    a = Coordinate(59.3293, 18.0686)
    b = Coordinate(57.7089, 11.9746)
    assert calculate_distance(a, b) == pytest.approx(calculate_distance(b, a))
    assert calculate_distance(a, b) == pytest.approx(397, abs=2)


def test_one_degree_of_latitude():
    assert calculate_distance(Coordinate(0, 0), Coordinate(1, 0)) == pytest.approx(111.19508, rel=1e-6)


def test_centroid_ignores_places_without_coordinates(place_factory):
    places = [place_factory("a", 10, 20), place_factory("b", 20, 40), place_factory("c")]
    assert calculate_centroid(places) == Coordinate(15, 30)


def test_centroid_without_coordinates_is_origin(place_factory):
    assert calculate_centroid([place_factory("a"), place_factory("b")]) == Coordinate(0, 0)


def test_total_distance_skips_legs_without_coordinates(place_factory):
    a = place_factory("a", 0, 0)
    b = place_factory("b", 0, 1)
    gap = place_factory("gap")
    c = place_factory("c", 0, 2)
    expected = calculate_distance(a.location, b.location)
    assert calculate_total_distance([a, b, gap, c]) == pytest.approx(expected)
    assert calculate_total_distance([a]) == 0


def test_format_coordinate():
    assert format_coordinate(59.331) == "59.331"
    assert format_coordinate(-99.17) == "-99.17"
    assert format_coordinate(18.0) == "18"


def test_place_token_encodes_address(place_factory):
    place = place_factory("guntherska", address="Östra Ågatan 31, Uppsala")
    assert place_token(place) == "%C3%96stra%20%C3%85gatan%2031%2C%20Uppsala"


def test_gmaps_url_single_place(place_factory):
    url = build_gmaps_url([place_factory("a", 59.331, 18.0716)], "walking")
    assert url == (
        "https://www.google.com/maps/dir/?api=1"
        "&origin=59.331,18.0716&destination=59.331,18.0716&travelmode=walking"
    )
    assert "waypoints" not in url


def test_gmaps_url_two_places_has_no_waypoints(place_factory):
    url = build_gmaps_url([place_factory("a", 59.331, 18.0716), place_factory("b", 59.3251, 18.0711)], "driving")
    assert url == (
        "https://www.google.com/maps/dir/?api=1"
        "&origin=59.331,18.0716&destination=59.3251,18.0711&travelmode=driving"
    )


def test_gmaps_url_waypoints_between_first_and_last(place_factory):
    places = [
        place_factory("a", 1.5, 2.5),
        place_factory("b", 3.5, 4.5),
        place_factory("c", address="Haga Nygata 28"),
        place_factory("d", 5.5, 6.5),
    ]
    url = build_gmaps_url(places, "walking")
    assert "&origin=1.5,2.5&" in url
    assert "&destination=5.5,6.5&" in url
    assert "&waypoints=3.5,4.5|Haga%20Nygata%2028&" in url
    assert url.endswith("&travelmode=walking")


def test_gmaps_url_empty_list():
    assert build_gmaps_url([], "walking") == ""


def test_proximity_orders_by_nearest_neighbor(place_factory):
    places = [
        place_factory("p0", 0, 0),
        place_factory("p1", 0, 3),
        place_factory("p2", 0, 1),
        place_factory("x"),
        place_factory("p3", 0, 2),
    ]
    ordered = order_places_by_proximity(places)
    assert [p.id for p in ordered] == ["p0", "p2", "p3", "p1", "x"]


def test_proximity_ties_keep_input_order(place_factory):
    places = [place_factory("p0", 0, 0), place_factory("east", 0, 1), place_factory("west", 0, -1)]
    assert [p.id for p in order_places_by_proximity(places)] == ["p0", "east", "west"]


def test_proximity_without_coordinates_returns_input(place_factory):
    places = [place_factory("a"), place_factory("b")]
    assert order_places_by_proximity(places) == places


def test_estimate_route_time():
    assert estimate_route_time(2.0, 3, "walking") == 90
    assert estimate_route_time(15.0, 2, "driving") == 60
    assert estimate_route_time(0, 4, "walking") == 80


@pytest.mark.parametrize("distance, stops, mode, expected", [
    (1.0, 5, "walking", "excellent"),
    (2.0, 5, "walking", "good"),
    (6.0, 3, "walking", "fair"),
    (5.0, 4, "driving", "excellent"),
    (10.0, 6, "driving", "good"),
    (10.0, 3, "driving", "fair"),
    (0.0, 1, "walking", "excellent"),
])
def test_assess_route_quality(distance, stops, mode, expected):
    assert assess_route_quality(distance, stops, mode) == expected


def test_create_gpx_contains_stops_in_order(place_factory):
    places = [place_factory("a", 59.33, 18.07, name="Alfa"), place_factory("x"), place_factory("b", 59.32, 18.06, name="Beta")]
    route = RouteResult(places, 1.2, 60, "", "good")

    gpx = gpxpy.parse(create_gpx(route, "Testrutt"))

    assert [w.name for w in gpx.waypoints] == ["1. Alfa", "3. Beta"]
    assert gpx.routes[0].name == "Testrutt"
    assert len(gpx.routes[0].points) == 2
    assert gpx.routes[0].points[0].latitude == pytest.approx(59.33)


def test_format_time():
    assert format_time(45) == "45 min"
    assert format_time(135) == "2:15"


def test_category_display_text():
    assert get_category_display_text("walkway") == "Promenadstråk"
    assert get_category_display_text("bar") == "bar"


def test_route_options_rejects_unknown_mode():
    with pytest.raises(ValueError):
        RouteOptions(mode="cycling")
