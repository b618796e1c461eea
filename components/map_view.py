"""
Map visualization component using Folium (Leaflet for Python).
Renders the vernacular map of Perm with features colored by name type.

Layer stack, bottom to top:
- Esri light gray basemap tiles
- Districts (translucent polygons)
- Lines
- Points (circle markers)
- District labels (rebuilt on every zoom change)
"""
import html
from typing import Dict, List, Optional, Tuple

import folium
import pandas as pd
import streamlit as st
from streamlit_folium import st_folium

from utils.color_schemes import get_legend_entries, style_for_feature
from utils.data_loader import (
    FEATURE_ID_FIELD,
    LAYER_ORDER,
    MapLayers,
    make_feature_id,
)
from utils.label_policy import select_labeled_districts
from utils.view_state import DEFAULT_ZOOM


# Perm city center
MAP_CENTER = [58.01, 56.25]

# Esri World Light Gray Base - free basemap, no API key required
TILE_URL = "https://server.arcgisonline.com/ArcGIS/rest/services/Canvas/World_Light_Gray_Base/MapServer/tile/{z}/{y}/{x}"
TILE_ATTRIBUTION = "Tiles © Esri"

MAP_KEY = "vernacular_map"

# Only these trigger a rerun; panning alone does not
RETURNED_OBJECTS = [
    "zoom",
    "last_active_drawing",
    "last_object_clicked",
    "last_object_clicked_count",
]

LAYER_NAMES = {
    'districts': 'Районы',
    'lines': 'Линии',
    'points': 'Точки',
}

# Label style: text centered on the anchor point
LABEL_HTML = (
    '<div style="transform:translate(-50%,-50%);white-space:nowrap;'
    'font-size:12px;font-weight:600;color:#333;'
    'text-shadow:0 0 3px #fff,0 0 3px #fff,0 0 3px #fff;pointer-events:none;">'
    '{name}</div>'
)


def to_render_feature(feature: dict, feature_id: str) -> dict:
    """
    Copy a feature for rendering, stamping its id into the properties.

    The loaded feature is never modified; the id lets a click reported by
    the map be matched back to the loaded feature.
    """
    properties = dict(feature.get('properties') or {})
    properties[FEATURE_ID_FIELD] = feature_id
    return {
        'type': 'Feature',
        'geometry': feature.get('geometry'),
        'properties': properties,
    }


def create_hover_tooltip(feature: dict) -> Optional[folium.Tooltip]:
    """Sticky name tooltip shown on hover. None for nameless features."""
    name = (feature.get('properties') or {}).get('name')
    if not name:
        return None

    return folium.Tooltip(
        html.escape(str(name)),
        sticky=True,
        direction='top',
        offset=(0, -10),
        class_name='custom-tooltip',
    )


def create_feature_layer(layer_name: str, features) -> folium.FeatureGroup:
    """
    Create a FeatureGroup holding every feature of one layer.

    Each feature is its own GeoJson object so it can carry its own tooltip
    (features without a name get none). Points are drawn as circle markers.

    Args:
        layer_name: 'points', 'lines' or 'districts'
        features: Loaded features of the layer

    Returns:
        Folium FeatureGroup
    """
    group = folium.FeatureGroup(name=LAYER_NAMES.get(layer_name, layer_name))

    for index, feature in enumerate(features):
        if not feature.get('geometry'):
            continue

        render_feature = to_render_feature(feature, make_feature_id(layer_name, index))
        style = style_for_feature(feature)

        marker = None
        if render_feature['geometry'].get('type') in ('Point', 'MultiPoint'):
            marker = folium.CircleMarker(radius=style['radius'])

        folium.GeoJson(
            render_feature,
            style_function=lambda _, style=style: style,
            tooltip=create_hover_tooltip(feature),
            marker=marker,
        ).add_to(group)

    return group


def build_base_map(layers: MapLayers) -> folium.Map:
    """
    Build the map with basemap tiles and the three vector layers.

    Layers that failed to load are left out.

    Args:
        layers: Loaded map layers

    Returns:
        Folium Map
    """
    m = folium.Map(
        location=MAP_CENTER,
        zoom_start=DEFAULT_ZOOM,
        tiles=None,
        control_scale=True,
    )

    folium.TileLayer(
        tiles=TILE_URL,
        attr=TILE_ATTRIBUTION,
        name='Esri Light Gray',
    ).add_to(m)

    for layer_name in LAYER_ORDER:
        features = layers.get(layer_name)
        if features is None:
            continue
        create_feature_layer(layer_name, features).add_to(m)

    return m


def build_label_layer(districts, zoom: float) -> folium.FeatureGroup:
    """
    Build a fresh FeatureGroup with the district labels for this zoom.

    The group is always built from scratch; the map swaps it in for the
    previous label group.

    Args:
        districts: District features (None if not loaded)
        zoom: Current zoom level

    Returns:
        Folium FeatureGroup with one label marker per visible label
    """
    group = folium.FeatureGroup(name='Подписи', control=False)

    for label in select_labeled_districts(districts, zoom):
        folium.Marker(
            location=[label.latitude, label.longitude],
            icon=folium.DivIcon(
                html=LABEL_HTML.format(name=html.escape(label.name)),
                icon_size=(0, 0),
                class_name='feature-label',
            ),
            interactive=False,
        ).add_to(group)

    return group


def get_clicked_feature_id(map_state: Optional[Dict]) -> Optional[str]:
    """Id of the last clicked feature reported by the map, if any."""
    if not map_state:
        return None

    drawing = map_state.get('last_active_drawing') or {}
    properties = drawing.get('properties') or {}
    return properties.get(FEATURE_ID_FIELD)


def get_click_token(map_state: Optional[Dict]) -> Optional[Tuple]:
    """
    Identify the last click reported by the map.

    The map keeps reporting the same last click on every rerun, so a click
    is only new when this token differs from the last handled one. The click
    counter grows on every click, so clicking the same spot again (after
    closing the panel, say) still gives a new token.
    """
    feature_id = get_clicked_feature_id(map_state)
    if feature_id is None:
        return None

    clicked = map_state.get('last_object_clicked') or {}
    return (
        feature_id,
        map_state.get('last_object_clicked_count'),
        clicked.get('lat'),
        clicked.get('lng'),
    )


def get_reported_zoom(map_state: Optional[Dict]) -> Optional[float]:
    if not map_state:
        return None
    return map_state.get('zoom')


def render_map(
    base_map: folium.Map,
    label_layer: folium.FeatureGroup,
    height: int = 700
) -> Dict:
    """
    Render the map and return what the map reports back (zoom, last click).

    The label layer is passed as a dynamic feature group: the component
    removes the previous label group and adds this one without redrawing
    the rest of the map.

    Args:
        base_map: Map built by build_base_map (cached, so reruns keep the view)
        label_layer: Label group for the current zoom
        height: Map height in pixels

    Returns:
        Dict reported by st_folium
    """
    return st_folium(
        base_map,
        key=MAP_KEY,
        height=height,
        use_container_width=True,
        feature_group_to_add=label_layer,
        returned_objects=RETURNED_OBJECTS,
    )


def build_legend_html(counts: pd.DataFrame) -> str:
    """Build HTML for the name type legend (one row per type, table order)."""
    count_by_type = dict(zip(counts['name_type'], counts['count']))

    entries = []
    for name_type, color in get_legend_entries():
        entries.append(
            f'<div class="legend-entry" style="display:flex;align-items:center;gap:6px;margin-bottom:4px;">'
            f'<span class="legend-color-box" style="width:14px;height:14px;background:{color};border:1px solid #999;flex:none;"></span>'
            f'<span class="legend-label" style="font-size:12px;">{html.escape(name_type)}</span>'
            f'<span style="font-size:11px;color:#888;margin-left:auto;">{int(count_by_type.get(name_type, 0))}</span>'
            f'</div>'
        )

    return (
        '<div class="legend-box" style="padding:8px 10px;border:1px solid #e0e0e0;border-radius:6px;background:#fff;">'
        '<h4 style="margin:0 0 8px 0;font-size:14px;">Тип названия</h4>'
        + ''.join(entries) +
        '</div>'
    )


def render_name_type_legend(counts: pd.DataFrame) -> None:
    """Render the name type legend with feature counts."""
    st.markdown(build_legend_html(counts), unsafe_allow_html=True)
