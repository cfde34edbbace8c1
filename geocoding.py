"""
Geokodning av adresser för platser som saknar koordinater
"""

import logging
import time
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

import requests
import streamlit as st

from config import CACHE_TTL, NOMINATIM_BASE_URL, NOMINATIM_USER_AGENT
from models import Coordinate, Place
from utils import validate_coordinates

log = logging.getLogger("viberutt.geocoding")

@st.cache_data(ttl=CACHE_TTL)
def geocode_address(address: str) -> Optional[Tuple[float, float]]:
    """
    Geokoda en adress till koordinater via Nominatim

    Args:
        address: Adress att geokoda

    Returns:
        (lat, lng) eller None vid fel
    """
    try:
        url = f"{NOMINATIM_BASE_URL}/search"
        params = {
            "q": address,
            "format": "json",
            "limit": 1
        }
        headers = {"User-Agent": NOMINATIM_USER_AGENT}
        response = requests.get(url, params=params, headers=headers, timeout=10)
        time.sleep(1)  # Rate limiting för Nominatim

        if response.status_code == 200:
            data = response.json()
            if data:
                lat, lng = float(data[0]["lat"]), float(data[0]["lon"])
                if validate_coordinates(lat, lng):
                    return lat, lng
        else:
            log.warning("Nominatim svarade %s för %r", response.status_code, address)
    except (requests.RequestException, ValueError, KeyError) as e:
        log.warning("Geokodningsfel för %r: %s", address, e)
    return None

def fill_missing_coordinates(places: Sequence[Place]) -> List[Place]:
    """
    Slå upp koordinater för platser som saknar dem

    Platser som redan har koordinater, eller som inte gick att hitta,
    returneras oförändrade.

    Args:
        places: Lista med platser

    Returns:
        Ny lista i samma ordning
    """
    result = []
    for place in places:
        if place.location is None:
            coords = geocode_address(place.address)
            if coords:
                place = replace(place, location=Coordinate(*coords))
        result.append(place)
    return result
