"""
Kartfunktioner för visualisering
"""

from typing import List, Optional

import folium

from models import RouteResult
from utils import get_category_display_text

def marker_color(index: int, count: int) -> str:
    """Grön för första stoppet på kartan, röd för sista, blå annars"""
    if index == 0:
        return "green"
    if index == count - 1:
        return "red"
    return "blue"

def create_map(
    center: List[float],
    route: Optional[RouteResult] = None
) -> folium.Map:
    """
    Skapa Folium-karta med numrerade stopp och rutt

    Args:
        center: Kartans centrum [lat, lng]
        route: Planerad rutt

    Returns:
        Folium Map-objekt
    """
    m = folium.Map(
        location=center,
        zoom_start=13,
        control_scale=True
    )

    if not route:
        return m

    # Numreringen följer rutten, färgen bara stopp med koordinater
    located = [
        (order, place)
        for order, place in enumerate(route.ordered_places, start=1)
        if place.location is not None
    ]
    route_coords = [[place.location.lat, place.location.lng] for _, place in located]

    for index, (order, place) in enumerate(located):
        color = marker_color(index, len(located))

        folium.Marker(
            route_coords[index],
            popup=f"{order}. {place.name} ({get_category_display_text(place.category)})",
            tooltip=place.address,
            icon=folium.Icon(color=color, icon="info-sign")
        ).add_to(m)

    # Rita rutt
    if len(route_coords) > 1:
        # Olika färger beroende på strategi
        color_map = {
            "nearest-neighbor": "blue",
            "centroid-spiral": "purple",
            "category-priority": "darkgreen"
        }
        folium.PolyLine(
            route_coords,
            color=color_map.get(route.strategy, "gray"),
            weight=4,
            opacity=0.8,
            popup=f"{route.total_distance:.2f} km"
        ).add_to(m)

        # Anpassa zoom för att visa hela rutten
        bounds = [[min(p[0] for p in route_coords), min(p[1] for p in route_coords)],
                  [max(p[0] for p in route_coords), max(p[1] for p in route_coords)]]
        m.fit_bounds(bounds)

    return m
