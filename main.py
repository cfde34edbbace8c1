"""
Huvudapplikation för Streamlit stämningsruttplanerare
"""

import json
import logging

import streamlit as st
from streamlit_folium import st_folium
from datetime import datetime

# Importera moduler
from config import DEFAULT_CENTER, DEFAULT_MAX_STOPS, DEFAULT_VIBE_TEXT, MAX_STOPS, MIN_STOPS
from dataset import (
    CITIES,
    filter_suggestions_by_input,
    generate_suggestions,
    get_city,
    get_top_preview_places,
    normalize_input,
    select_candidates,
)
from geocoding import fill_missing_coordinates
from logging_config import configure
from map_utils import create_map
from models import RouteOptions, parse_places, validate_vibe_text
from routing import EmptyRouteError, generate_optimal_route
from utils import create_gpx, format_time, get_category_display_text

log = logging.getLogger("viberutt.app")

QUALITY_LABELS = {
    "excellent": "Utmärkt",
    "good": "Bra",
    "fair": "Godkänd"
}

def init_session_state():
    """Initiera session state"""
    if "route" not in st.session_state:
        st.session_state.route = None
    if "city_id" not in st.session_state:
        st.session_state.city_id = None
    if "route_mode" not in st.session_state:
        st.session_state.route_mode = "walking"

def use_suggestion(text):
    """Fyll i stämningstexten med ett förslag"""
    st.session_state.vibe_text = text

def stops_as_json(route):
    """Rutten som JSON i samma format som uppladdade platser"""
    return json.dumps([place.to_dict() for place in route.ordered_places], ensure_ascii=False, indent=2)

def load_uploaded_places(uploaded_file):
    """Läs egna platser från uppladdad JSON"""
    try:
        payload = json.load(uploaded_file)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        st.error(f"Kunde inte läsa filen: {e}")
        return []

    places = parse_places(payload)
    if not places:
        st.warning("Filen innehöll inga giltiga platser (id, name och address krävs)")
    return places

def main():
    """Huvudfunktion för Streamlit-appen"""
    st.set_page_config(
        page_title="Stämningsrutt",
        page_icon="🗺️",
        layout="wide"
    )

    configure()
    init_session_state()

    st.title("Stämningsrutt")
    st.markdown("Beskriv din stämning så planerar vi en kort rutt genom staden")

    # Sidebar för inställningar
    with st.sidebar:
        st.header("Inställningar")

        city_id = st.selectbox(
            "Stad",
            list(CITIES.keys()),
            format_func=lambda x: CITIES[x]["name"],
            key="city"
        )

        vibe_text = st.text_area(
            "Vad är du sugen på?",
            placeholder=f"T.ex. {DEFAULT_VIBE_TEXT} och utsikt",
            key="vibe_text",
            max_chars=500
        )

        if vibe_text.strip():
            preview = get_top_preview_places(city_id, vibe_text)
            if preview:
                st.caption("Till exempel: " + ", ".join(p.name for p in preview))

        suggestions = filter_suggestions_by_input(generate_suggestions(city_id), vibe_text)
        if suggestions:
            st.caption("Förslag")
            for suggestion in suggestions:
                st.button(
                    suggestion.text,
                    key=f"suggestion_{suggestion.text}",
                    on_click=use_suggestion,
                    args=(suggestion.text,)
                )

        mode = st.radio(
            "Färdsätt",
            ["walking", "driving"],
            format_func=lambda x: "Till fots" if x == "walking" else "Bil",
            key="mode"
        )

        max_stops = st.slider(
            "Antal stopp",
            min_value=MIN_STOPS,
            max_value=MAX_STOPS,
            value=DEFAULT_MAX_STOPS,
            key="max_stops"
        )

        st.divider()

        prefer_scenic = st.checkbox(
            "Föredra parker och promenadstråk",
            key="prefer_scenic",
            help="Parker och promenadstråk prioriteras i rutten"
        )

        max_distance = st.number_input(
            "Maxdistans (km, 0 = ingen)",
            min_value=0.0,
            max_value=100.0,
            value=0.0,
            step=0.5,
            key="max_distance"
        )

        geocode_missing = st.checkbox(
            "Slå upp saknade koordinater",
            key="geocode_missing",
            help="Använder OpenStreetMap för platser som bara har adress"
        )

        uploaded_file = st.file_uploader("Egna platser (JSON)", type=["json"], key="uploaded_places")

        st.divider()

        generate_button = st.button("Planera rutt", type="primary", use_container_width=True)

        if generate_button:
            user_input = normalize_input({
                "city_id": city_id,
                "user_text": vibe_text,
                "mode": mode,
                "max_stops": max_stops
            })

            error = validate_vibe_text(vibe_text) if not uploaded_file else None
            if error:
                st.error(error)
            else:
                if uploaded_file:
                    candidates = load_uploaded_places(uploaded_file)
                else:
                    candidates = select_candidates(user_input.city_id, user_input.user_text, user_input.max_stops)

                if geocode_missing and candidates:
                    with st.spinner("Söker adresser..."):
                        candidates = fill_missing_coordinates(candidates)

                options = RouteOptions(
                    mode=user_input.mode,
                    max_distance=max_distance or None,
                    prefer_scenic_route=prefer_scenic
                )

                log.info("Planerar rutt med %d kandidater i %s", len(candidates), user_input.city_id)

                with st.spinner("Beräknar rutt..."):
                    try:
                        st.session_state.route = generate_optimal_route(candidates, options)
                        st.session_state.city_id = user_input.city_id
                        st.session_state.route_mode = options.mode
                    except EmptyRouteError:
                        st.error("Hittade inga platser. Försök med en annan beskrivning.")

    # Huvudinnehåll
    col1, col2 = st.columns([2, 1])
    route = st.session_state.route

    with col1:
        st.subheader("Karta")

        city = get_city(st.session_state.city_id or city_id)
        center = city["center"] if city else DEFAULT_CENTER

        m = create_map(center, route)

        st_folium(
            m,
            key="map",
            width=None,
            height=500
        )

    with col2:
        st.subheader("Sammanfattning")

        if route:
            st.metric("Distans", f"{route.total_distance:.2f} km")
            st.metric("Uppskattad tid", format_time(route.estimated_time))
            st.metric("Kvalitet", QUALITY_LABELS.get(route.route_quality, route.route_quality))

            if route.route_quality == "fair":
                st.caption("Rutten kunde inte optimeras fullt ut, vissa platser saknar position")

            st.link_button(
                "Öppna promenadrutt" if st.session_state.route_mode == "walking" else "Öppna rutt för bil",
                route.gmaps_url,
                use_container_width=True
            )

            st.divider()

            st.subheader("Stopp")
            for order, place in enumerate(route.ordered_places, start=1):
                with st.container(border=True):
                    st.markdown(f"**{order}. {place.name}**")
                    st.caption(f"{get_category_display_text(place.category)} • {place.address}")

            st.divider()

            # GPX-export
            st.subheader("Export")

            gpx_name = st.text_input(
                "Ruttnamn",
                value=f"Stämningsrutt {datetime.now().strftime('%Y-%m-%d')}",
                key="gpx_name"
            )

            st.download_button(
                label="Ladda ner GPX",
                data=create_gpx(route, gpx_name),
                file_name=f"{gpx_name.replace(' ', '_')}.gpx",
                mime="application/gpx+xml",
                use_container_width=True
            )

            st.download_button(
                label="Ladda ner stopp (JSON)",
                data=stops_as_json(route),
                file_name=f"{gpx_name.replace(' ', '_')}.json",
                mime="application/json",
                use_container_width=True
            )
        else:
            st.info("Planera en rutt för att se sammanfattning")

    # Footer
    st.divider()
    st.markdown(
        """
        <div style='text-align: center; color: gray; font-size: 0.8em;'>
        Skapad för stadsvandrare |
        Använder Google Maps & OpenStreetMap
        </div>
        """,
        unsafe_allow_html=True
    )

if __name__ == "__main__":
    main()
