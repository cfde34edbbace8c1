import folium
import pytest

from map_utils import create_map, marker_color
from models import RouteOptions, RouteResult
from routing import generate_optimal_route


def children_of_type(m, cls):
    return [child for child in m._children.values() if isinstance(child, cls)]


def test_empty_map():
    m = create_map([59.3293, 18.0686])
    assert isinstance(m, folium.Map)
    assert children_of_type(m, folium.Marker) == []


def test_map_has_marker_per_located_stop(mixed_places):
    route = generate_optimal_route(mixed_places, RouteOptions())
    m = create_map([59.3293, 18.0686], route)

    located = [p for p in route.ordered_places if p.location is not None]
    assert len(children_of_type(m, folium.Marker)) == len(located)
    assert len(children_of_type(m, folium.PolyLine)) == 1


@pytest.mark.parametrize("index, count, color", [
    (0, 3, "green"),
    (1, 3, "blue"),
    (2, 3, "red"),
    (0, 1, "green"),
])
def test_marker_color(index, count, color):
    assert marker_color(index, count) == color


def test_start_and_end_markers_skip_stops_without_coordinates(place_factory):
    ordered = [
        place_factory("a"),
        place_factory("b", 59.3310, 18.0716),
        place_factory("c", 59.3340, 18.0632),
        place_factory("d", 59.3251, 18.0711),
        place_factory("e"),
    ]
    route = RouteResult(ordered, 1.2, 150, "https://www.google.com/maps/dir/?api=1", "good")
    m = create_map([59.3293, 18.0686], route)

    assert len(children_of_type(m, folium.Marker)) == 3
    html = m.get_root().render()
    assert '"green"' in html
    assert '"red"' in html
