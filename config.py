"""
Konfiguration och konstanter för stämningsruttplaneraren
"""

import os

# Standardvärden
DEFAULT_CITY = "stockholm"
DEFAULT_CENTER = [59.3293, 18.0686]  # Stockholm
DEFAULT_MODE = "walking"
DEFAULT_MAX_STOPS = 4
MIN_STOPS = 3
MAX_STOPS = 5
DEFAULT_VIBE_TEXT = "lugn fika"

TRAVEL_MODES = ("walking", "driving")

# API URLs
GMAPS_DIR_URL = "https://www.google.com/maps/dir/?api=1"
NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
NOMINATIM_USER_AGENT = "StreamlitViberutt/1.0"

# Geografi
EARTH_RADIUS_KM = 6371

# Tidsuppskattning
BASE_SPEED_KMH = {"walking": 4, "driving": 30}
STOP_MINUTES = {"walking": 20, "driving": 15}
SINGLE_PLACE_MINUTES = 30
ADDRESS_ONLY_STOP_MINUTES = 45

# Kategorier
SCENIC_CATEGORIES = ("park", "walkway")
SCENIC_DISTANCE_FACTOR = 0.8

CATEGORY_PRIORITY = {
    "walking": ["park", "walkway", "cafe", "cafe-bakery", "museum", "landmark", "district", "zoo"],
    "driving": ["museum", "landmark", "district", "park", "zoo", "cafe", "cafe-bakery", "walkway"],
}

CATEGORY_DISPLAY_NAMES = {
    "park": "Park",
    "cafe": "Kafé",
    "cafe-bakery": "Bageri & kafé",
    "museum": "Museum",
    "landmark": "Landmärke",
    "walkway": "Promenadstråk",
    "district": "Stadsdel",
    "zoo": "Djurpark",
}

# Förslag på stämningar
VIBE_SUGGESTION_TEXTS = {
    "fika-lugnt": "lugn fika",
    "natur-utsikt": "natur och utsikt",
    "konst-kultur": "konst och kultur",
    "familj": "utflykt med familjen",
}

COMBO_SUGGESTIONS = [
    ("fika med utsikt", ("fika-lugnt", "natur-utsikt")),
    ("kultur för hela familjen", ("konst-kultur", "familj")),
]

CATEGORY_SUGGESTION_NAMES = {
    "park": "parker",
    "cafe": "kaféer",
    "cafe-bakery": "konditorier",
    "museum": "museer",
    "landmark": "landmärken",
    "walkway": "promenadstråk",
    "district": "stadsdelar",
    "zoo": "djurparker",
}

SUGGESTION_PRIORITY = {"vibe": 3, "combo": 2, "category": 1}
MAX_SUGGESTIONS = 8
PREVIEW_COUNT = 3

# Poängsättning av rutter
BASE_ROUTE_SCORE = 100
OVER_MAX_DISTANCE_PENALTY = 10  # per km över maxdistans
DISTANCE_PENALTY = 2  # per km
SHORT_ROUTE_MINUTES = 180
SHORT_ROUTE_BONUS = 20
SCENIC_PLACE_BONUS = 10

# Kvalitetsgränser: (snitt km per etapp, total km)
QUALITY_THRESHOLDS = {
    "walking": {"excellent": (0.5, 3), "good": (1, 5)},
    "driving": {"excellent": (2, 15), "good": (5, 25)},
}

# Cache-inställningar
CACHE_TTL = 3600  # 1 timme

# Loggning
LOG_LEVEL = os.getenv("VIBERUTT_LOG_LEVEL", "INFO")
