from collections import Counter

import pytest

from models import RouteOptions, RouteResult
from routing import (
    EmptyRouteError,
    calculate_route_score,
    default_strategies,
    generate_optimal_route,
    is_permutation,
)
from routing_strategies import NearestNeighborStrategy, RoutingStrategy
from utils import calculate_total_distance


class BrokenStrategy(RoutingStrategy):
    name = "broken"

    def plan(self, places, options):
        raise RuntimeError("trasig")


class DroppingStrategy(RoutingStrategy):
    name = "dropping"

    def plan(self, places, options):
        return NearestNeighborStrategy().plan(places[1:], options)


class NamedNearestNeighbor(NearestNeighborStrategy):
    def __init__(self, name):
        super().__init__()
        self.name = name


def ids(places):
    return [p.id for p in places]


def route_with(places, distance, minutes=60):
    return RouteResult(places, distance, minutes, "", "good")


def test_empty_input_raises():
    with pytest.raises(EmptyRouteError):
        generate_optimal_route([])
    assert issubclass(EmptyRouteError, ValueError)


def test_single_place_route(place_factory):
    place = place_factory("solo", 59.33, 18.07)
    route = generate_optimal_route([place], RouteOptions(mode="driving"))

    assert route.ordered_places == [place]
    assert route.total_distance == 0
    assert route.estimated_time == 30
    assert route.route_quality == "excellent"
    assert "origin=59.33,18.07&destination=59.33,18.07&travelmode=driving" in route.gmaps_url


def test_default_options(mexico_places):
    route = generate_optimal_route(mexico_places)
    assert route.gmaps_url.endswith("travelmode=walking")


def test_example_route_distance_matches_order(mexico_places):
    route = generate_optimal_route(mexico_places, RouteOptions(mode="walking"))
    assert Counter(ids(route.ordered_places)) == Counter(["a", "b", "c"])
    assert route.total_distance == pytest.approx(calculate_total_distance(route.ordered_places))


def test_all_places_without_coordinates(place_factory):
    places = [
        place_factory("a", address="Kungsgatan 55, Stockholm"),
        place_factory("b", address="Vasagatan 37"),
        place_factory("c", address="Haga Nygata"),
        place_factory("d", address="Skansberget"),
        place_factory("e", address="Götaplatsen 6"),
    ]
    route = generate_optimal_route(places)

    assert ids(route.ordered_places) == ["a", "b", "c", "d", "e"]
    assert route.total_distance == 0
    assert route.route_quality == "fair"
    assert "origin=Kungsgatan%2055%2C%20Stockholm" in route.gmaps_url
    assert "destination=G%C3%B6taplatsen%206" in route.gmaps_url
    assert "waypoints=Vasagatan%2037|Haga%20Nygata|Skansberget" in route.gmaps_url


@pytest.mark.parametrize("mode", ["walking", "driving"])
@pytest.mark.parametrize("scenic", [False, True])
@pytest.mark.parametrize("max_distance", [None, 0.5])
def test_result_is_permutation_of_input(mixed_places, mode, scenic, max_distance):
    options = RouteOptions(mode=mode, prefer_scenic_route=scenic, max_distance=max_distance)
    route = generate_optimal_route(mixed_places, options)

    assert len(route.ordered_places) == len(mixed_places)
    assert Counter(ids(route.ordered_places)) == Counter(ids(mixed_places))
    assert is_permutation(route, mixed_places)


def test_failing_strategy_is_skipped(mexico_places):
    route = generate_optimal_route(mexico_places, strategies=[BrokenStrategy(), NearestNeighborStrategy()])
    assert route.strategy == "nearest-neighbor"


def test_strategy_dropping_places_is_skipped(mexico_places):
    route = generate_optimal_route(mexico_places, strategies=[DroppingStrategy(), NamedNearestNeighbor("kept")])
    assert route.strategy == "kept"
    assert len(route.ordered_places) == 3


def test_all_strategies_failing_falls_back_to_input_order(mexico_places):
    places = list(reversed(mexico_places))
    route = generate_optimal_route(places, strategies=[BrokenStrategy(), DroppingStrategy()])

    assert route.ordered_places == places
    assert route.total_distance == 0
    assert route.strategy == "fallback"


def test_first_strategy_wins_ties(mexico_places):
    route = generate_optimal_route(
        mexico_places,
        strategies=[NamedNearestNeighbor("first"), NamedNearestNeighbor("second")]
    )
    assert route.strategy == "first"


def test_default_strategy_order():
    assert [s.name for s in default_strategies()] == ["nearest-neighbor", "centroid-spiral", "category-priority"]


def test_score_rewards_short_routes(place_factory):
    places = [place_factory("a", category="museum")]
    assert calculate_route_score(route_with(places, 0, 60), RouteOptions()) == 120
    assert calculate_route_score(route_with(places, 10, 200), RouteOptions()) == 80


def test_score_penalizes_exceeding_max_distance(place_factory):
    places = [place_factory("a", category="museum")]
    options = RouteOptions(max_distance=5)
    assert calculate_route_score(route_with(places, 10, 200), options) == pytest.approx(30)
    assert calculate_route_score(route_with(places, 4, 200), options) == pytest.approx(92)


def test_score_is_never_negative(place_factory):
    assert calculate_route_score(route_with([place_factory("a")], 100, 600), RouteOptions()) == 0


def test_score_decreases_with_distance(place_factory):
    places = [place_factory("a"), place_factory("b")]
    options = RouteOptions(max_distance=3)
    shorter = calculate_route_score(route_with(places, 2.0, 100), options)
    longer = calculate_route_score(route_with(places, 2.5, 100), options)
    assert shorter > longer


def test_scenic_bonus_per_park_or_walkway(place_factory):
    scenic = [place_factory("p", category="park"), place_factory("w", category="walkway"), place_factory("m")]
    plain = [place_factory("p"), place_factory("w"), place_factory("m")]
    options = RouteOptions(prefer_scenic_route=True)

    difference = calculate_route_score(route_with(scenic, 5), options) - calculate_route_score(route_with(plain, 5), options)
    assert difference == pytest.approx(20)
    assert calculate_route_score(route_with(scenic, 5), RouteOptions()) == calculate_route_score(route_with(plain, 5), RouteOptions())
