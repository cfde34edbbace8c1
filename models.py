"""
Datamodeller för stämningsruttplaneraren
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from config import DEFAULT_MODE, TRAVEL_MODES

log = logging.getLogger("viberutt.models")

@dataclass(frozen=True)
class Coordinate:
    """En position i WGS-84"""
    lat: float
    lng: float

class PlaceIn(BaseModel):
    """En plats som den ser ut i uppladdad JSON, innan den blir en Place"""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    category: str = ""
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    vibes: List[str] = Field(default_factory=list)
    description: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, v):
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator("id", "name", "address", "category", "description", mode="before")
    @classmethod
    def _strip_strings(cls, v):
        return v.strip() if isinstance(v, str) else v

@dataclass(frozen=True)
class Place:
    """En intressant plats. Koordinater kan saknas."""
    id: str
    name: str
    category: str
    address: str
    location: Optional[Coordinate] = None
    vibes: Tuple[str, ...] = ()
    description: str = ""

    @property
    def has_coordinates(self) -> bool:
        return self.location is not None

    @classmethod
    def from_dict(cls, data: dict) -> "Place":
        """
        Skapa Place från en dict med nycklarna id, name, category, address, lat, lng

        Raises:
            ValidationError: om id, namn eller adress saknas eller koordinaterna är ogiltiga
        """
        row = PlaceIn.model_validate(data)

        location = None
        if row.lat is not None and row.lng is not None:
            location = Coordinate(row.lat, row.lng)

        return cls(
            id=row.id,
            name=row.name,
            category=row.category,
            address=row.address,
            location=location,
            vibes=tuple(row.vibes),
            description=row.description,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "address": self.address,
            "lat": self.location.lat if self.location else None,
            "lng": self.location.lng if self.location else None,
            "vibes": list(self.vibes),
            "description": self.description,
        }

def parse_places(payload) -> List[Place]:
    """
    Tolka en lista med plats-dicts, ogiltiga poster hoppas över

    Args:
        payload: Lista med dicts (t.ex. från uppladdad JSON)

    Returns:
        Lista med Place
    """
    if not isinstance(payload, list):
        return []

    places = []
    for index, item in enumerate(payload):
        try:
            places.append(Place.from_dict(item))
        except ValidationError as exc:
            log.warning("Hoppar över plats %d: %s", index, exc.errors()[0]["msg"])
    return places

@dataclass
class RouteOptions:
    """Inställningar för ruttplaneringen"""
    mode: str = DEFAULT_MODE
    max_distance: Optional[float] = None  # km, straffas i poängen, inget hårt tak
    prefer_scenic_route: bool = False
    avoid_backtracking: bool = False  # påverkar ingen strategi ännu

    def __post_init__(self):
        if self.mode not in TRAVEL_MODES:
            raise ValueError(f"Okänt färdsätt: {self.mode}")
        if self.max_distance is not None and self.max_distance < 0:
            raise ValueError("max_distance får inte vara negativ")

@dataclass
class RouteResult:
    """Resultat från ruttplaneringen"""
    ordered_places: List[Place]
    total_distance: float  # km
    estimated_time: int  # minuter
    gmaps_url: str
    route_quality: str  # "excellent", "good" eller "fair"
    strategy: str = ""

@dataclass
class Suggestion:
    """Förslag på stämningstext"""
    text: str
    kind: str  # "vibe", "combo" eller "category"
    vibes: List[str]

@dataclass
class UserInput:
    """Normaliserad indata från gränssnittet"""
    city_id: str
    user_text: str
    mode: str = DEFAULT_MODE
    max_stops: int = 4

def validate_vibe_text(text: str) -> Optional[str]:
    """
    Kontrollera stämningstexten

    Returns:
        Felmeddelande eller None om texten är giltig
    """
    if not text or not text.strip():
        return "Beskriv vilken sorts upplevelse du letar efter"
    if len(text) > 500:
        return "Texten är för lång. Max 500 tecken."
    if len(text) < 3:
        return "Beskriv din stämning lite mer utförligt"
    return None
