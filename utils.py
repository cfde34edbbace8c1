"""
Hjälpfunktioner för stämningsruttplaneraren
"""

import math
from typing import List, Sequence
from urllib.parse import quote

import gpxpy
import gpxpy.gpx

from config import (
    ADDRESS_ONLY_STOP_MINUTES,
    BASE_SPEED_KMH,
    CATEGORY_DISPLAY_NAMES,
    EARTH_RADIUS_KM,
    GMAPS_DIR_URL,
    QUALITY_THRESHOLDS,
    STOP_MINUTES,
)
from models import Coordinate, Place, RouteOptions, RouteResult

def calculate_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Storcirkelavstånd mellan två koordinater (Haversine formula)

    Args:
        a: Första koordinaten
        b: Andra koordinaten

    Returns:
        Avstånd i km
    """
    lat1, lng1 = math.radians(a.lat), math.radians(a.lng)
    lat2, lng2 = math.radians(b.lat), math.radians(b.lng)

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    h = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng/2)**2
    c = 2 * math.asin(math.sqrt(min(1.0, h)))

    return EARTH_RADIUS_KM * c

def calculate_centroid(places: Sequence[Place]) -> Coordinate:
    """
    Medelpunkt för de platser som har koordinater

    Returns:
        Coordinate, (0, 0) om ingen plats har koordinater
    """
    located = [p.location for p in places if p.location is not None]
    if not located:
        return Coordinate(0.0, 0.0)

    return Coordinate(
        lat=sum(c.lat for c in located) / len(located),
        lng=sum(c.lng for c in located) / len(located),
    )

def calculate_total_distance(places: Sequence[Place]) -> float:
    """
    Summera avstånden mellan på varandra följande platser

    Etapper där någon av platserna saknar koordinater räknas som 0.
    """
    total = 0.0
    for current, following in zip(places, places[1:]):
        if current.location is not None and following.location is not None:
            total += calculate_distance(current.location, following.location)
    return total

def format_coordinate(value: float) -> str:
    """Kortaste textform för ett tal, heltal utan decimaler"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)

def place_token(place: Place) -> str:
    """Platsens del i en Google Maps-länk: "lat,lng" eller URL-kodad adress"""
    if place.location is not None:
        return f"{format_coordinate(place.location.lat)},{format_coordinate(place.location.lng)}"
    return quote(place.address, safe="-_.!~*'()")

def build_gmaps_url(places: Sequence[Place], mode: str) -> str:
    """
    Bygg en Google Maps-länk med vägbeskrivning genom alla platser

    Args:
        places: Platser i besöksordning
        mode: "walking" eller "driving"

    Returns:
        URL som sträng, tom sträng om listan är tom
    """
    if not places:
        return ""

    travel_mode = f"travelmode={mode}"

    if len(places) == 1:
        location = place_token(places[0])
        return f"{GMAPS_DIR_URL}&origin={location}&destination={location}&{travel_mode}"

    url = f"{GMAPS_DIR_URL}&origin={place_token(places[0])}&destination={place_token(places[-1])}"

    waypoints = places[1:-1]
    if waypoints:
        url += "&waypoints=" + "|".join(place_token(p) for p in waypoints)

    return f"{url}&{travel_mode}"

def order_places_by_proximity(places: Sequence[Place]) -> List[Place]:
    """
    Ordna platser med närmaste-granne-heuristik

    Startar i den första platsen med koordinater. Platser utan koordinater
    läggs sist i ursprunglig ordning.

    Args:
        places: Oordnad lista med platser

    Returns:
        Ny lista i besöksordning
    """
    with_coords = [p for p in places if p.location is not None]
    without_coords = [p for p in places if p.location is None]

    if not with_coords:
        return list(places)

    current = with_coords[0]
    ordered = [current]
    remaining = with_coords[1:]

    while remaining:
        nearest_index = 0
        nearest_distance = float('inf')

        for i, candidate in enumerate(remaining):
            distance = calculate_distance(current.location, candidate.location)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = i

        current = remaining.pop(nearest_index)
        ordered.append(current)

    return ordered + without_coords

def estimate_route_time(distance: float, stop_count: int, mode: str) -> int:
    """
    Uppskatta total tid för rutten

    Args:
        distance: Total distans i km
        stop_count: Antal stopp
        mode: "walking" eller "driving"

    Returns:
        Minuter, avrundat (halvor uppåt)
    """
    travel_time = (distance / BASE_SPEED_KMH[mode]) * 60
    stop_time = stop_count * STOP_MINUTES[mode]
    return int(math.floor(travel_time + stop_time + 0.5))

def assess_route_quality(distance: float, stop_count: int, mode: str) -> str:
    """
    Betygsätt rutten utifrån distans och antal stopp

    Returns:
        "excellent", "good" eller "fair"
    """
    avg_distance = distance / max(1, stop_count - 1)

    for grade in ("excellent", "good"):
        max_avg, max_total = QUALITY_THRESHOLDS[mode][grade]
        if avg_distance < max_avg and distance < max_total:
            return grade
    return "fair"

def create_route_result(
    places: List[Place],
    total_distance: float,
    options: RouteOptions,
    strategy: str = ""
) -> RouteResult:
    """Sätt ihop ett RouteResult med tid, länk och kvalitet"""
    return RouteResult(
        ordered_places=places,
        total_distance=total_distance,
        estimated_time=estimate_route_time(total_distance, len(places), options.mode),
        gmaps_url=build_gmaps_url(places, options.mode),
        route_quality=assess_route_quality(total_distance, len(places), options.mode),
        strategy=strategy,
    )

def create_address_only_route(places: List[Place], options: RouteOptions) -> RouteResult:
    """Rutt när ingen plats har koordinater: ursprunglig ordning, ingen distans"""
    return RouteResult(
        ordered_places=list(places),
        total_distance=0.0,
        estimated_time=len(places) * ADDRESS_ONLY_STOP_MINUTES,
        gmaps_url=build_gmaps_url(places, options.mode),
        route_quality="fair",
        strategy="address-only",
    )

def create_gpx(route: RouteResult, name: str = "Stämningsrutt") -> str:
    """
    Skapa GPX-fil från en planerad rutt

    Args:
        route: RouteResult
        name: Namn på rutten

    Returns:
        GPX som sträng
    """
    gpx = gpxpy.gpx.GPX()

    gpx.creator = "Stämningsruttplanerare"
    gpx.description = f"{len(route.ordered_places)} stopp, {route.total_distance:.2f} km"

    gpx_route = gpxpy.gpx.GPXRoute(name=name)
    gpx.routes.append(gpx_route)

    for order, place in enumerate(route.ordered_places, start=1):
        # Platser utan koordinater kan inte ritas in
        if place.location is None:
            continue

        label = f"{order}. {place.name}"
        gpx.waypoints.append(gpxpy.gpx.GPXWaypoint(
            place.location.lat,
            place.location.lng,
            name=label,
            description=place.address
        ))
        gpx_route.points.append(gpxpy.gpx.GPXRoutePoint(
            place.location.lat,
            place.location.lng,
            name=label
        ))

    return gpx.to_xml()

def format_time(minutes: float) -> str:
    """
    Formatera tid från minuter till sträng

    Args:
        minutes: Antal minuter

    Returns:
        "H:MM" eller "M min"
    """
    hours = int(minutes // 60)
    mins = int(minutes % 60)

    if hours > 0:
        return f"{hours}:{mins:02d}"
    return f"{mins} min"

def get_category_display_text(category: str) -> str:
    return CATEGORY_DISPLAY_NAMES.get(category, category)

def validate_coordinates(lat: float, lng: float) -> bool:
    """
    Validera att koordinater är giltiga

    Args:
        lat: Latitud
        lng: Longitud

    Returns:
        True om koordinaterna är giltiga
    """
    return -90 <= lat <= 90 and -180 <= lng <= 180
