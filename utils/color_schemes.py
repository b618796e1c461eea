"""
Color schemes for the vernacular map.

Every feature is colored by its "name type" (Тип названия) - the kind of
association behind the colloquial name. The table is closed: six known
types, anything else falls back to a neutral gray.
"""
from typing import Dict, List, Tuple

# Property holding the name type in the source GeoJSON files
NAME_TYPE_FIELD = 'Тип названия'

# =============================================================================
# Name Type Colors (legend order)
# =============================================================================
NAME_TYPE_COLORS = {
    'Ассоциация с объектом': '#ff7f00',               # Orange
    'Ассоциация с официальным названием': '#377eb8',  # Blue
    'Визуальная ассоциация': '#4daf4a',               # Green
    'Историческая ассоциация': '#e41a1c',             # Red
    'Реальное название': '#984ea3',                   # Purple
    'Другое': '#999999',                              # Gray (Other)
}

# Fallback for missing, empty or unrecognized name types
DEFAULT_COLOR = '#cccccc'

# Used for the original (official) name line in the info panel
ORIGINAL_NAME_COLOR = NAME_TYPE_COLORS['Реальное название']

AREA_GEOMETRY_TYPES = ('Polygon', 'MultiPolygon')


def get_name_type(feature: dict):
    """Return the feature's name type, or None if it has none."""
    properties = feature.get('properties') or {}
    return properties.get(NAME_TYPE_FIELD)


def get_name_type_color(name_type) -> str:
    """Get hex color for a name type, gray if unknown."""
    if not isinstance(name_type, str):
        return DEFAULT_COLOR
    return NAME_TYPE_COLORS.get(name_type, DEFAULT_COLOR)


def style_for_feature(feature: dict) -> Dict:
    """
    Resolve the Leaflet style for a single feature.

    Areas (Polygon, MultiPolygon) get a translucent fill and a thin outline.
    Points and lines are drawn opaque with a heavier stroke; points become
    circle markers with a fixed radius.

    Args:
        feature: GeoJSON feature dict

    Returns:
        Dict of Leaflet path options (color, fillColor, fillOpacity, weight, ...)
    """
    color = get_name_type_color(get_name_type(feature))
    geometry = feature.get('geometry') or {}

    if geometry.get('type') in AREA_GEOMETRY_TYPES:
        return {
            'color': color,
            'fillColor': color,
            'fillOpacity': 0.4,
            'weight': 1,
        }

    return {
        'color': color,
        'fillColor': color,
        'fillOpacity': 1,
        'opacity': 1,
        'weight': 2,
        'radius': 6,
    }


def get_legend_entries() -> List[Tuple[str, str]]:
    """Get (name type, hex color) pairs in legend order."""
    return list(NAME_TYPE_COLORS.items())
