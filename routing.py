"""
Huvudsaklig routing-modul som låter flera strategier tävla om bästa rutt
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence

from config import (
    BASE_ROUTE_SCORE,
    DISTANCE_PENALTY,
    OVER_MAX_DISTANCE_PENALTY,
    SCENIC_CATEGORIES,
    SCENIC_PLACE_BONUS,
    SHORT_ROUTE_BONUS,
    SHORT_ROUTE_MINUTES,
    SINGLE_PLACE_MINUTES,
)
from models import Place, RouteOptions, RouteResult
from routing_strategies import (
    CategoryPriorityStrategy,
    CentroidSpiralStrategy,
    NearestNeighborStrategy,
    RoutingStrategy,
)
from utils import build_gmaps_url, create_route_result

log = logging.getLogger("viberutt.routing")

class EmptyRouteError(ValueError):
    """Kastas när ruttplaneraren får en tom lista med platser."""

def default_strategies() -> List[RoutingStrategy]:
    """Strategierna i den ordning de utvärderas, först vinner vid lika poäng"""
    return [
        NearestNeighborStrategy(),
        CentroidSpiralStrategy(),
        CategoryPriorityStrategy(),
    ]

def calculate_route_score(route: RouteResult, options: RouteOptions) -> float:
    """
    Poängsätt en rutt, högre är bättre

    Args:
        route: RouteResult att bedöma
        options: RouteOptions med användarens preferenser

    Returns:
        Poäng, aldrig under 0
    """
    score = float(BASE_ROUTE_SCORE)

    if options.max_distance and route.total_distance > options.max_distance:
        score -= (route.total_distance - options.max_distance) * OVER_MAX_DISTANCE_PENALTY

    score -= route.total_distance * DISTANCE_PENALTY

    if route.estimated_time < SHORT_ROUTE_MINUTES:
        score += SHORT_ROUTE_BONUS

    if options.prefer_scenic_route:
        scenic_places = sum(1 for p in route.ordered_places if p.category in SCENIC_CATEGORIES)
        score += scenic_places * SCENIC_PLACE_BONUS

    return max(0.0, score)

def is_permutation(route: RouteResult, places: Sequence[Place]) -> bool:
    """Kontrollera att rutten innehåller exakt samma platser som indata"""
    if len(route.ordered_places) != len(places):
        return False
    return Counter(p.id for p in route.ordered_places) == Counter(p.id for p in places)

def create_single_place_route(place: Place, options: RouteOptions) -> RouteResult:
    return RouteResult(
        ordered_places=[place],
        total_distance=0.0,
        estimated_time=SINGLE_PLACE_MINUTES,
        gmaps_url=build_gmaps_url([place], options.mode),
        route_quality="excellent",
        strategy="single-place",
    )

def fallback_route(places: List[Place], options: RouteOptions) -> RouteResult:
    """Ooptimerad rutt i ursprunglig ordning"""
    return create_route_result(list(places), 0.0, options, "fallback")

def _run_strategy(
    strategy: RoutingStrategy,
    places: List[Place],
    options: RouteOptions
) -> Optional[RouteResult]:
    """Kör en strategi, None om den misslyckas eller tappar platser"""
    try:
        route = strategy.plan(places, options)
    except Exception:
        log.warning("Strategin %s misslyckades", strategy.name, exc_info=True)
        return None

    if route is None or not is_permutation(route, places):
        log.warning("Strategin %s gav ingen användbar rutt", strategy.name)
        return None

    return route

def generate_optimal_route(
    places: Sequence[Place],
    options: Optional[RouteOptions] = None,
    strategies: Optional[Sequence[RoutingStrategy]] = None
) -> RouteResult:
    """
    Planera bästa möjliga besöksordning för platserna

    Args:
        places: Oordnad lista med platser (minst en)
        options: RouteOptions, standard är promenad utan preferenser
        strategies: Strategier att jämföra, standard är default_strategies()

    Returns:
        RouteResult från strategin med högst poäng

    Raises:
        EmptyRouteError: om places är tom
    """
    if not places:
        raise EmptyRouteError("Inga platser att planera rutt för")

    options = options or RouteOptions()
    places = list(places)

    if len(places) == 1:
        return create_single_place_route(places[0], options)

    best_route = None
    best_score = -1.0

    for strategy in strategies or default_strategies():
        route = _run_strategy(strategy, places, options)
        if route is None:
            continue

        score = calculate_route_score(route, options)
        log.debug("%s: %.2f km, %d min, poäng %.1f", strategy.name, route.total_distance, route.estimated_time, score)

        if score > best_score:
            best_score = score
            best_route = route

    if best_route is None:
        log.warning("Alla strategier misslyckades, använder ursprunglig ordning")
        return fallback_route(places, options)

    log.info("Valde %s (%d stopp, %.2f km)", best_route.strategy, len(places), best_route.total_distance)
    return best_route
