import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from models import Coordinate, Place


def make_place(place_id, lat=None, lng=None, category="museum", address=None, name=None):
    location = Coordinate(lat, lng) if lat is not None and lng is not None else None
    return Place(
        id=place_id,
        name=name or place_id.upper(),
        category=category,
        address=address or f"{place_id} 1",
        location=location,
    )


@pytest.fixture
def place_factory():
    return make_place


@pytest.fixture
def mexico_places():
    return [
        make_place("a", 19.40, -99.17),
        make_place("b", 19.41, -99.15),
        make_place("c", 19.43, -99.20),
    ]


@pytest.fixture
def mixed_places():
    return [
        make_place("kungstradgarden", 59.3310, 18.0716, category="park"),
        make_place("vasamuseet", 59.3280, 18.0914, category="museum"),
        make_place("rosendal", category="cafe", address="Rosendalsterrassen 12, 115 21 Stockholm"),
        make_place("monteliusvagen", 59.3199, 18.0597, category="walkway"),
        make_place("bar", 59.3172, 18.0580, category="bar"),
        make_place("skeppsholmen", category="island", address="Skeppsholmen, 111 49 Stockholm"),
        make_place("gamla-stan", 59.3251, 18.0711, category="district"),
        make_place("stadshuset", 59.3275, 18.0543, category="landmark"),
    ]
