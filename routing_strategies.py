"""
Ruttstrategier: närmaste granne, centroid/spiral och kategoriprioritet
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

from config import CATEGORY_PRIORITY, SCENIC_CATEGORIES, SCENIC_DISTANCE_FACTOR
from models import Place, RouteOptions, RouteResult
from utils import (
    calculate_centroid,
    calculate_distance,
    calculate_total_distance,
    create_address_only_route,
    create_route_result,
)

log = logging.getLogger("viberutt.strategies")

def find_best_starting_place(places: Sequence[Place], options: RouteOptions) -> int:
    """
    Välj startplats för en rutt

    Med scenisk preferens väljs första park eller promenadstråk. Annars den
    plats som ligger närmast platsernas medelpunkt.

    Args:
        places: Kandidater (minst en)
        options: RouteOptions

    Returns:
        Index i places
    """
    if options.prefer_scenic_route:
        for i, place in enumerate(places):
            if place.category in SCENIC_CATEGORIES:
                return i

    centroid = calculate_centroid(places)
    best_index = 0
    best_distance = float('inf')

    for i, place in enumerate(places):
        if place.location is None:
            continue
        distance = calculate_distance(centroid, place.location)
        if distance < best_distance:
            best_distance = distance
            best_index = i

    return best_index

def adjust_distance_for_preferences(distance: float, place: Place, options: RouteOptions) -> float:
    """Sceniska platser ser närmare ut när användaren föredrar dem"""
    if options.prefer_scenic_route and place.category in SCENIC_CATEGORIES:
        return distance * SCENIC_DISTANCE_FACTOR
    return distance

def _address_tokens(address: str) -> List[str]:
    return re.sub(r"[^a-z0-9\s]", "", address.lower()).split()

def addresses_similar(first: str, second: str) -> bool:
    """Två adresser liknar varandra om de delar ett ord längre än 3 tecken"""
    second_tokens = set(_address_tokens(second))
    return any(len(word) > 3 and word in second_tokens for word in _address_tokens(first))

def find_logical_insert_position(ordered: Sequence[Place], place: Place) -> int:
    """
    Hitta en plats i rutten för ett stopp utan koordinater

    Stoppet hamnar direkt efter första platsen med samma kategori eller
    liknande adress, annars sist.
    """
    for i, existing in enumerate(ordered):
        if existing.category == place.category or addresses_similar(existing.address, place.address):
            return i + 1
    return len(ordered)

def insert_places_without_coords(ordered: List[Place], places_without_coords: Sequence[Place]) -> List[Place]:
    """Returnera en ny lista där platserna utan koordinater har placerats in"""
    result = list(ordered)
    for place in places_without_coords:
        position = find_logical_insert_position(result, place)
        result = result[:position] + [place] + result[position:]
    return result

def calculate_insertion_cost(ordered: Sequence[Place], new_place: Place, position: int) -> float:
    """
    Hur mycket längre rutten blir om new_place sätts in på position

    Etapper mot platser utan koordinater räknas som 0.
    """
    if new_place.location is None:
        return 0.0

    before = ordered[position - 1] if position > 0 else None
    after = ordered[position] if position < len(ordered) else None

    before_located = before is not None and before.location is not None
    after_located = after is not None and after.location is not None

    cost = 0.0
    if before_located:
        cost += calculate_distance(before.location, new_place.location)
    if after_located:
        cost += calculate_distance(new_place.location, after.location)
    if before_located and after_located:
        cost -= calculate_distance(before.location, after.location)

    return cost

def find_best_insert_position(ordered: Sequence[Place], new_place: Place) -> int:
    """Position med lägst insättningskostnad, första vinner vid lika"""
    if not ordered:
        return 0
    if new_place.location is None:
        return len(ordered)

    best_position = len(ordered)
    best_increase = float('inf')

    for position in range(len(ordered) + 1):
        increase = calculate_insertion_cost(ordered, new_place, position)
        if increase < best_increase:
            best_increase = increase
            best_position = position

    return best_position

def create_spiral_route(places: Sequence[Place]) -> List[Place]:
    """
    Bygg en rutt utåt från den första (mest centrala) platsen

    Nästa stopp är det med högst 1 / (avstånd + 0.1) från senaste stoppet.
    """
    if len(places) <= 2:
        return list(places)

    ordered = [places[0]]
    remaining = list(places[1:])

    while remaining:
        last_place = ordered[-1]
        best_index = 0
        best_score = -1.0

        for i, candidate in enumerate(remaining):
            distance = calculate_distance(last_place.location, candidate.location)
            score = 1 / (distance + 0.1)
            if score > best_score:
                best_score = score
                best_index = i

        ordered.append(remaining.pop(best_index))

    return ordered

class RoutingStrategy:
    """Basklass för ruttstrategier"""

    name = "base"

    def plan(self, places: List[Place], options: RouteOptions) -> RouteResult:
        raise NotImplementedError

class NearestNeighborStrategy(RoutingStrategy):
    """Girig rutt som alltid går till närmaste obesökta plats"""

    def __init__(self):
        self.name = "nearest-neighbor"

    def plan(self, places: List[Place], options: RouteOptions) -> RouteResult:
        with_coords = [p for p in places if p.location is not None]
        without_coords = [p for p in places if p.location is None]

        if not with_coords:
            return create_address_only_route(places, options)

        start_index = find_best_starting_place(with_coords, options)
        current = with_coords[start_index]
        ordered = [current]
        remaining = with_coords[:start_index] + with_coords[start_index + 1:]

        while remaining:
            nearest_index = 0
            nearest_distance = float('inf')

            for i, candidate in enumerate(remaining):
                distance = calculate_distance(current.location, candidate.location)
                adjusted = adjust_distance_for_preferences(distance, candidate, options)
                if adjusted < nearest_distance:
                    nearest_distance = adjusted
                    nearest_index = i

            current = remaining.pop(nearest_index)
            ordered.append(current)

        final = insert_places_without_coords(ordered, without_coords)
        return create_route_result(final, calculate_total_distance(final), options, self.name)

class CentroidSpiralStrategy(RoutingStrategy):
    """Startar nära medelpunkten och spiralar utåt"""

    def __init__(self, fallback: Optional[RoutingStrategy] = None):
        self.name = "centroid-spiral"
        self.fallback = fallback or NearestNeighborStrategy()

    def plan(self, places: List[Place], options: RouteOptions) -> RouteResult:
        with_coords = [p for p in places if p.location is not None]
        without_coords = [p for p in places if p.location is None]

        if len(with_coords) < 2:
            log.debug("För få koordinater för spiral, använder %s", self.fallback.name)
            return self.fallback.plan(places, options)

        centroid = calculate_centroid(with_coords)
        by_distance = sorted(with_coords, key=lambda p: calculate_distance(centroid, p.location))

        ordered = create_spiral_route(by_distance)
        final = insert_places_without_coords(ordered, without_coords)
        return create_route_result(final, calculate_total_distance(final), options, self.name)

class CategoryPriorityStrategy(RoutingStrategy):
    """Bygger rutten kategori för kategori enligt färdsättets prioritet"""

    def __init__(self, priority_table: Optional[Dict[str, List[str]]] = None):
        self.name = "category-priority"
        self.priority_table = priority_table or CATEGORY_PRIORITY

    def plan(self, places: List[Place], options: RouteOptions) -> RouteResult:
        if not any(p.location is not None for p in places):
            return create_address_only_route(places, options)

        groups: Dict[str, List[Place]] = {}
        for place in places:
            groups.setdefault(place.category, []).append(place)

        priority = list(self.priority_table[options.mode])
        # Okända kategorier sist, i den ordning de först förekommer
        category_order = priority + [c for c in groups if c not in priority]

        ordered: List[Place] = []
        for category in category_order:
            group = groups.get(category, [])
            if not group:
                continue

            if not ordered:
                start_index = find_best_starting_place(group, options)
                ordered = [group[start_index]]
                group = group[:start_index] + group[start_index + 1:]

            for place in group:
                position = find_best_insert_position(ordered, place)
                ordered = ordered[:position] + [place] + ordered[position:]

        return create_route_result(ordered, calculate_total_distance(ordered), options, self.name)
