"""
Statisk data med städer och platser samt urval av kandidater
"""

from typing import Dict, List, Optional

from config import (
    CATEGORY_SUGGESTION_NAMES,
    COMBO_SUGGESTIONS,
    DEFAULT_CITY,
    DEFAULT_MAX_STOPS,
    DEFAULT_VIBE_TEXT,
    MAX_STOPS,
    MAX_SUGGESTIONS,
    MIN_STOPS,
    PREVIEW_COUNT,
    SUGGESTION_PRIORITY,
    VIBE_SUGGESTION_TEXTS,
)
from models import Place, Suggestion, UserInput

CITIES = {
    "stockholm": {
        "name": "Stockholm",
        "center": [59.3293, 18.0686],
        "places": [
            {"id": "sthlm-kungstradgarden", "name": "Kungsträdgården", "category": "park",
             "address": "Kungsträdgården, 111 47 Stockholm", "lat": 59.3310, "lng": 18.0716,
             "vibes": ["fika-lugnt", "natur-utsikt"], "description": "körsbärsträd och uteserveringar"},
            {"id": "sthlm-monteliusvagen", "name": "Monteliusvägen", "category": "walkway",
             "address": "Monteliusvägen, 118 25 Stockholm", "lat": 59.3199, "lng": 18.0597,
             "vibes": ["natur-utsikt"], "description": "promenad med utsikt över Riddarfjärden"},
            {"id": "sthlm-vete-katten", "name": "Vete-Katten", "category": "cafe-bakery",
             "address": "Kungsgatan 55, 111 22 Stockholm", "lat": 59.3340, "lng": 18.0632,
             "vibes": ["fika-lugnt"], "description": "klassiskt konditori med kanelbullar"},
            {"id": "sthlm-drop-coffee", "name": "Drop Coffee", "category": "cafe",
             "address": "Wollmar Yxkullsgatan 10, 118 50 Stockholm", "lat": 59.3172, "lng": 18.0580,
             "vibes": ["fika-lugnt"], "description": "rosteri och kaffebar"},
            {"id": "sthlm-rosendal", "name": "Rosendals Trädgård", "category": "cafe",
             "address": "Rosendalsterrassen 12, 115 21 Stockholm", "lat": None, "lng": None,
             "vibes": ["fika-lugnt", "natur-utsikt"], "description": "trädgårdskafé på Djurgården"},
            {"id": "sthlm-vasamuseet", "name": "Vasamuseet", "category": "museum",
             "address": "Galärvarvsvägen 14, 115 21 Stockholm", "lat": 59.3280, "lng": 18.0914,
             "vibes": ["konst-kultur"], "description": "regalskeppet Vasa från 1628"},
            {"id": "sthlm-fotografiska", "name": "Fotografiska", "category": "museum",
             "address": "Stadsgårdshamnen 22, 116 45 Stockholm", "lat": 59.3178, "lng": 18.0856,
             "vibes": ["konst-kultur"], "description": "fotografi och utsikt"},
            {"id": "sthlm-stadshuset", "name": "Stadshuset", "category": "landmark",
             "address": "Hantverkargatan 1, 111 52 Stockholm", "lat": 59.3275, "lng": 18.0543,
             "vibes": ["konst-kultur", "natur-utsikt"], "description": "tornet och Gyllene salen"},
            {"id": "sthlm-gamla-stan", "name": "Gamla stan", "category": "district",
             "address": "Stortorget, 111 29 Stockholm", "lat": 59.3251, "lng": 18.0711,
             "vibes": ["konst-kultur", "fika-lugnt"], "description": "medeltida gränder och historia"},
            {"id": "sthlm-skansen", "name": "Skansen", "category": "zoo",
             "address": "Djurgårdsslätten 49, 115 21 Stockholm", "lat": 59.3262, "lng": 18.1036,
             "vibes": ["natur-utsikt", "familj"], "description": "friluftsmuseum med nordiska djur"},
        ],
    },
    "goteborg": {
        "name": "Göteborg",
        "center": [57.7089, 11.9746],
        "places": [
            {"id": "gbg-slottsskogen", "name": "Slottsskogen", "category": "park",
             "address": "Slottsskogen, 413 08 Göteborg", "lat": 57.6864, "lng": 11.9430,
             "vibes": ["natur-utsikt", "familj"], "description": "stor stadspark med djur"},
            {"id": "gbg-haga", "name": "Haga", "category": "district",
             "address": "Haga Nygata, 413 01 Göteborg", "lat": 57.6983, "lng": 11.9567,
             "vibes": ["fika-lugnt", "konst-kultur"], "description": "trähus och kaféer"},
            {"id": "gbg-husaren", "name": "Café Husaren", "category": "cafe-bakery",
             "address": "Haga Nygata 28, 413 01 Göteborg", "lat": 57.6988, "lng": 11.9551,
             "vibes": ["fika-lugnt"], "description": "jättelika hagabullar"},
            {"id": "gbg-da-matteo", "name": "Da Matteo", "category": "cafe",
             "address": "Magasinsgatan 17, 411 18 Göteborg", "lat": None, "lng": None,
             "vibes": ["fika-lugnt"], "description": "kaffe och bageri"},
            {"id": "gbg-skansen-kronan", "name": "Skansen Kronan", "category": "landmark",
             "address": "Skansberget, 413 02 Göteborg", "lat": 57.6955, "lng": 11.9520,
             "vibes": ["natur-utsikt", "konst-kultur"], "description": "fästning med utsikt"},
            {"id": "gbg-konstmuseet", "name": "Göteborgs konstmuseum", "category": "museum",
             "address": "Götaplatsen 6, 412 56 Göteborg", "lat": 57.6966, "lng": 11.9806,
             "vibes": ["konst-kultur"], "description": "nordisk konst vid Poseidon"},
            {"id": "gbg-rohsska", "name": "Röhsska museet", "category": "museum",
             "address": "Vasagatan 37, 411 37 Göteborg", "lat": 57.6989, "lng": 11.9730,
             "vibes": ["konst-kultur"], "description": "design och konsthantverk"},
            {"id": "gbg-feskekorka", "name": "Feskekôrka", "category": "landmark",
             "address": "Fisktorget 4, 411 20 Göteborg", "lat": 57.7014, "lng": 11.9589,
             "vibes": ["konst-kultur"], "description": "fiskhall i kyrkoform"},
        ],
    },
    "uppsala": {
        "name": "Uppsala",
        "center": [59.8586, 17.6389],
        "places": [
            {"id": "upp-domkyrkan", "name": "Uppsala domkyrka", "category": "landmark",
             "address": "Domkyrkoplan, 753 10 Uppsala", "lat": 59.8581, "lng": 17.6338,
             "vibes": ["konst-kultur"], "description": "Nordens största kyrka"},
            {"id": "upp-botaniska", "name": "Botaniska trädgården", "category": "park",
             "address": "Villavägen 8, 752 36 Uppsala", "lat": 59.8525, "lng": 17.6300,
             "vibes": ["natur-utsikt", "fika-lugnt"], "description": "barockträdgård och orangeri"},
            {"id": "upp-fyrisan", "name": "Promenad längs Fyrisån", "category": "walkway",
             "address": "Östra Ågatan, 753 22 Uppsala", "lat": None, "lng": None,
             "vibes": ["natur-utsikt", "fika-lugnt"], "description": "stråk längs ån"},
            {"id": "upp-guntherska", "name": "Güntherska", "category": "cafe-bakery",
             "address": "Östra Ågatan 31, 753 22 Uppsala", "lat": 59.8597, "lng": 17.6378,
             "vibes": ["fika-lugnt"], "description": "hovkonditori vid ån"},
            {"id": "upp-gustavianum", "name": "Gustavianum", "category": "museum",
             "address": "Akademigatan 3, 753 10 Uppsala", "lat": 59.8578, "lng": 17.6336,
             "vibes": ["konst-kultur"], "description": "universitetsmuseum med anatomiska teatern"},
            {"id": "upp-slottet", "name": "Uppsala slott", "category": "landmark",
             "address": "Slottet, 752 37 Uppsala", "lat": 59.8537, "lng": 17.6355,
             "vibes": ["konst-kultur", "natur-utsikt"], "description": "slott och konstmuseum"},
        ],
    },
}

CITY_ALIASES = {
    "stockholm": "stockholm",
    "sthlm": "stockholm",
    "sto": "stockholm",
    "goteborg": "goteborg",
    "göteborg": "goteborg",
    "gbg": "goteborg",
    "gothenburg": "goteborg",
    "uppsala": "uppsala",
    "upp": "uppsala",
}

DRIVING_WORDS = ("driving", "bil", "car", "auto")

def get_city(city_id: str) -> Optional[Dict]:
    return CITIES.get(city_id)

def get_places_for_city(city_id: str) -> List[Place]:
    """Hämta stadens platser, tom lista om staden saknas"""
    city = get_city(city_id)
    if not city:
        return []
    return [Place.from_dict(item) for item in city["places"]]

def filter_places_by_text(city_id: str, text: str, limit: int = 20) -> List[Place]:
    """
    Enkel nyckelordsmatchning mot namn, kategori, adress, beskrivning och stämningar

    Returns:
        Matchande platser, flest träffar först
    """
    terms = text.lower().split()
    if not terms:
        return []

    scored = []
    for place in get_places_for_city(city_id):
        searchable = " ".join([place.name, place.category, place.address, place.description, *place.vibes]).lower()
        score = sum(1 for term in terms if term in searchable)
        if score > 0:
            scored.append((score, place))

    scored.sort(key=lambda item: -item[0])
    return [place for _, place in scored[:limit]]

def select_candidates(city_id: str, text: str, max_stops: int = DEFAULT_MAX_STOPS) -> List[Place]:
    """Välj kandidater till rutten, alla stadens platser om inget matchar"""
    matches = filter_places_by_text(city_id, text)
    if not matches:
        matches = get_places_for_city(city_id)
    return matches[:max_stops]

def get_top_preview_places(city_id: str, text: str, count: int = PREVIEW_COUNT) -> List[Place]:
    """De bästa träffarna medan användaren skriver"""
    return filter_places_by_text(city_id, text, limit=count)

def generate_suggestions(city_id: str) -> List[Suggestion]:
    """
    Föreslå stämningstexter utifrån stadens kategorier och stämningar

    Kategorier och stämningar med minst två platser ger ett förslag var,
    kombinationer ges när båda stämningarna finns i staden. Stämningar
    kommer först, sedan kombinationer och sist kategorier.

    Args:
        city_id: Stadens id

    Returns:
        Högst MAX_SUGGESTIONS förslag
    """
    category_groups: Dict[str, List[Place]] = {}
    vibe_groups: Dict[str, List[Place]] = {}
    for place in get_places_for_city(city_id):
        category_groups.setdefault(place.category, []).append(place)
        for vibe in place.vibes:
            vibe_groups.setdefault(vibe, []).append(place)

    suggestions = []
    for category, places in category_groups.items():
        if len(places) >= 2:
            name = CATEGORY_SUGGESTION_NAMES.get(category, category)
            vibes = list(dict.fromkeys(v for p in places for v in p.vibes))
            suggestions.append(Suggestion(f"utforska {name}", "category", vibes))

    for vibe, places in vibe_groups.items():
        if len(places) >= 2 and vibe in VIBE_SUGGESTION_TEXTS:
            suggestions.append(Suggestion(VIBE_SUGGESTION_TEXTS[vibe], "vibe", [vibe]))

    for text, vibes in COMBO_SUGGESTIONS:
        if all(vibe in vibe_groups for vibe in vibes):
            suggestions.append(Suggestion(text, "combo", list(vibes)))

    suggestions.sort(key=lambda s: -SUGGESTION_PRIORITY[s.kind])
    return suggestions[:MAX_SUGGESTIONS]

def filter_suggestions_by_input(suggestions: List[Suggestion], text: str) -> List[Suggestion]:
    """Behåll förslag där något ord i texten finns i förslaget eller dess stämningar"""
    terms = text.lower().split()
    if not terms:
        return suggestions

    return [
        s for s in suggestions
        if any(term in s.text.lower() or any(term in v.lower() for v in s.vibes) for term in terms)
    ]

def normalize_input(raw: Dict) -> UserInput:
    """
    Normalisera indata från gränssnittet och fyll i standardvärden

    Args:
        raw: Dict med city_id/city, user_text/text, mode och max_stops

    Returns:
        UserInput
    """
    city_text = str(raw.get("city_id") or raw.get("city") or "").lower().strip()
    city_id = CITY_ALIASES.get(city_text, DEFAULT_CITY)

    mode_text = str(raw.get("mode") or "").lower()
    mode = "driving" if any(word in mode_text for word in DRIVING_WORDS) else "walking"

    try:
        max_stops = int(raw.get("max_stops") or DEFAULT_MAX_STOPS)
    except (TypeError, ValueError):
        max_stops = DEFAULT_MAX_STOPS
    max_stops = min(max(max_stops, MIN_STOPS), MAX_STOPS)

    return UserInput(
        city_id=city_id,
        user_text=raw.get("user_text") or raw.get("text") or DEFAULT_VIBE_TEXT,
        mode=mode,
        max_stops=max_stops,
    )
