"""
Utilities for the vernacular map.

Modules:
- data_loader: GeoJSON layer loading (local files or HTTP)
- color_schemes: Name type colors and feature styles
- label_policy: District label visibility by zoom and area
- text_preview: Explainer preview and expansion rule
- view_state: Page view state and UI events
"""

from .color_schemes import (
    NAME_TYPE_FIELD,
    NAME_TYPE_COLORS,
    DEFAULT_COLOR,
    get_name_type_color,
    style_for_feature,
)

from .data_loader import (
    MapLayers,
    load_feature_collection,
    load_map_layers,
    count_by_name_type,
)

from .label_policy import (
    LABEL_MIN_ZOOM,
    LABEL_MIN_AREA_M2,
    geodesic_area_m2,
    select_labeled_districts,
)

from .text_preview import preview_text, is_expandable

from .view_state import ViewState, SelectionStatus, apply_event

__all__ = [
    # Color schemes
    'NAME_TYPE_FIELD',
    'NAME_TYPE_COLORS',
    'DEFAULT_COLOR',
    'get_name_type_color',
    'style_for_feature',
    # Data loader
    'MapLayers',
    'load_feature_collection',
    'load_map_layers',
    'count_by_name_type',
    # Labels
    'LABEL_MIN_ZOOM',
    'LABEL_MIN_AREA_M2',
    'geodesic_area_m2',
    'select_labeled_districts',
    # Text
    'preview_text',
    'is_expandable',
    # View state
    'ViewState',
    'SelectionStatus',
    'apply_event',
]
