"""
Vernacular Map of Perm

An interactive map of the colloquial names Perm residents use for places
in their city:
- Points, lines and districts colored by the kind of association behind the name
- Hover for the name, click for the story behind it
- District names appear as labels when zoomed in (large districts always)

Built with Streamlit + Folium.
"""
import logging
from typing import Optional

import streamlit as st

from utils.data_loader import (
    MapLayers,
    build_feature_index,
    count_by_name_type,
    load_map_layers,
)
from utils.view_state import Event, FeatureClicked, ViewState, ZoomChanged, apply_event
from components.map_view import (
    build_base_map,
    build_label_layer,
    get_click_token,
    get_clicked_feature_id,
    get_reported_zoom,
    render_map,
    render_name_type_legend,
)
from components.info_panel import render_info_panel
from components.about_panel import render_about_button, render_about_panel

logger = logging.getLogger(__name__)

MAP_TITLE = "Вернакулярная карта Перми"

# Session state keys
VIEW_STATE_KEY = 'view_state'
LAST_CLICK_KEY = 'last_click_token'


# Page configuration
st.set_page_config(
    page_title=MAP_TITLE,
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Custom CSS for a map-first layout
st.markdown("""
<style>
    .block-container {
        padding-top: 0.5rem !important;
        padding-bottom: 0.5rem !important;
        max-width: 100% !important;
    }

    /* Header */
    .header-trapezoid {
        background: #333;
        clip-path: polygon(0 0, 100% 0, 96% 100%, 4% 100%);
        padding: 6px 0;
        margin: 0 auto 8px auto;
        max-width: 640px;
        text-align: center;
    }
    .header-title {
        color: #fff !important;
        font-size: 1.3rem !important;
        margin: 0 !important;
        padding: 0 !important;
    }

    /* Info panel */
    .panel-title {
        font-weight: 700;
        font-size: 1.1rem;
    }
    .panel-original {
        font-size: 0.85rem;
        margin-top: 2px;
    }
    .panel-explainer {
        font-size: 0.9rem;
        line-height: 1.4;
        white-space: pre-line;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def load_layers() -> MapLayers:
    """
    Load the three map layers once per process.

    Failed layers are cached as absent too; the data is static.
    """
    layers = load_map_layers()
    loaded = [name for name in ('points', 'lines', 'districts') if layers.get(name) is not None]
    logger.info(f"Map layers loaded: {loaded}")
    return layers


@st.cache_resource(show_spinner=False)
def get_base_map():
    """Base map is built once so reruns do not redraw it (and keep the view)."""
    return build_base_map(load_layers())


@st.cache_data(show_spinner=False)
def get_feature_index() -> dict:
    return build_feature_index(load_layers())


def get_view_state() -> ViewState:
    if VIEW_STATE_KEY not in st.session_state:
        st.session_state[VIEW_STATE_KEY] = ViewState()
    return st.session_state[VIEW_STATE_KEY]


def dispatch(event: Event) -> None:
    """Apply a UI event to the page's view state."""
    st.session_state[VIEW_STATE_KEY] = apply_event(get_view_state(), event)


def handle_map_events(map_state: dict, feature_index: Optional[dict] = None) -> bool:
    """
    Turn what the map reported into view events.

    Args:
        map_state: Dict reported by the map on this run
        feature_index: Feature id -> loaded feature (defaults to the cached index)

    Returns:
        True if the zoom changed (labels must be rebuilt)
    """
    if feature_index is None:
        feature_index = get_feature_index()

    zoom_changed = False

    zoom = get_reported_zoom(map_state)
    if zoom is not None and zoom != get_view_state().zoom:
        dispatch(ZoomChanged(zoom))
        zoom_changed = True

    token = get_click_token(map_state)
    if token is not None and token != st.session_state.get(LAST_CLICK_KEY):
        st.session_state[LAST_CLICK_KEY] = token
        feature = feature_index.get(get_clicked_feature_id(map_state))
        if feature is not None:
            dispatch(FeatureClicked(feature))
        else:
            logger.warning(f"Clicked feature not found: {token[0]}")

    return zoom_changed


def main():
    """Main application entry point."""

    with st.spinner("Загрузка карты..."):
        layers = load_layers()

    st.markdown(
        f'<div class="header-trapezoid"><h1 class="header-title">{MAP_TITLE}</h1></div>',
        unsafe_allow_html=True
    )

    render_about_button(dispatch)
    render_about_panel(get_view_state(), dispatch)

    map_col, side_col = st.columns([3, 1])

    with map_col:
        # Labels are rebuilt from scratch on every run
        label_layer = build_label_layer(layers.districts, get_view_state().zoom)
        map_state = render_map(get_base_map(), label_layer)

    if handle_map_events(map_state):
        st.rerun()

    with side_col:
        render_name_type_legend(count_by_name_type(layers))
        render_info_panel(get_view_state(), dispatch)


if __name__ == "__main__":
    main()
