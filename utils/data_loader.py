"""
Data loading for the vernacular map.

Loads the three static GeoJSON layers (points, lines, districts) from a base
location - a local directory or an HTTP(S) URL.

Data Source: data/*.geojson next to app.py (default), or the location given
by st.secrets["data_base_url"].

A layer that fails to load (missing file, network error, malformed JSON) is
simply absent: the loader logs a warning and returns None for it.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

import httpx
import pandas as pd

from .color_schemes import NAME_TYPE_COLORS, get_name_type

# Configure logging
logger = logging.getLogger(__name__)

# Repository root; data files live in <root>/data/
DEFAULT_DATA_BASE = Path(__file__).parent.parent

# Layer name -> path relative to the data base
DATA_FILES = {
    'points': 'data/points.geojson',
    'lines': 'data/lines.geojson',
    'districts': 'data/districts.geojson',
}

# Render order, bottom to top
LAYER_ORDER = ('districts', 'lines', 'points')

FEATURE_ID_FIELD = '_fid'

HTTP_TIMEOUT = 30.0

FeatureCollection = Tuple[dict, ...]


@dataclass(frozen=True)
class MapLayers:
    """The three loaded feature collections. None means the layer failed to load."""

    points: Optional[FeatureCollection] = None
    lines: Optional[FeatureCollection] = None
    districts: Optional[FeatureCollection] = None

    def get(self, layer_name: str) -> Optional[FeatureCollection]:
        return getattr(self, layer_name)

    def iter_features(self) -> Iterator[Tuple[str, int, dict]]:
        """Yield (layer name, index, feature) across all loaded layers."""
        for layer_name in LAYER_ORDER:
            for index, feature in enumerate(self.get(layer_name) or ()):
                yield layer_name, index, feature


def get_data_base() -> Union[str, Path]:
    """
    Get the base location for data files.

    Checks st.secrets["data_base_url"] first (Streamlit Cloud or a local
    .streamlit/secrets.toml), then falls back to the repository root.
    """
    import streamlit as st

    # st.secrets raises if no secrets file exists at all
    try:
        if 'data_base_url' in st.secrets:
            base = str(st.secrets['data_base_url'])
            logger.info(f"Using data base from secrets: {base}")
            return base
    except Exception:
        pass

    return DEFAULT_DATA_BASE


def is_url(location: Union[str, Path]) -> bool:
    return isinstance(location, str) and location.lower().startswith(('http://', 'https://'))


def read_document(base: Union[str, Path], relative_path: str) -> str:
    """
    Read a text document relative to the data base.

    Raises:
        httpx.HTTPError: If the HTTP request fails or returns an error status
        OSError: If the local file cannot be read
    """
    if is_url(base):
        url = f"{str(base).rstrip('/')}/{relative_path}"
        response = httpx.get(url, timeout=HTTP_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
        return response.text

    path = Path(base) / relative_path
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_feature_collection(text: str) -> FeatureCollection:
    """
    Parse a GeoJSON FeatureCollection document into a tuple of features.

    Raises:
        ValueError: If the text is not JSON or not a FeatureCollection
    """
    document = json.loads(text)

    if not isinstance(document, dict) or document.get('type') != 'FeatureCollection':
        raise ValueError("Document is not a GeoJSON FeatureCollection")

    features = document.get('features')
    if not isinstance(features, list):
        raise ValueError("FeatureCollection has no 'features' list")

    return tuple(f for f in features if isinstance(f, dict))


def load_feature_collection(
    base: Union[str, Path],
    relative_path: str
) -> Optional[FeatureCollection]:
    """
    Load one GeoJSON layer.

    Args:
        base: Local directory or HTTP(S) base URL
        relative_path: Path of the GeoJSON file under the base

    Returns:
        Tuple of feature dicts, or None if the layer could not be loaded
    """
    try:
        text = read_document(base, relative_path)
        features = parse_feature_collection(text)
    except httpx.HTTPError as e:
        logger.warning(f"Could not fetch {relative_path}: {e}")
        return None
    except OSError as e:
        logger.warning(f"Could not read {relative_path}: {e}")
        return None
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(f"Invalid GeoJSON in {relative_path}: {e}")
        return None

    logger.info(f"Loaded {len(features)} features from {relative_path}")
    return features


def load_map_layers(base: Optional[Union[str, Path]] = None) -> MapLayers:
    """
    Load all three layers. Each layer loads independently of the others.

    Args:
        base: Data base location (defaults to get_data_base())

    Returns:
        MapLayers with None for any layer that failed
    """
    if base is None:
        base = get_data_base()

    loaded = {
        layer_name: load_feature_collection(base, relative_path)
        for layer_name, relative_path in DATA_FILES.items()
    }
    return MapLayers(**loaded)


def make_feature_id(layer_name: str, index: int) -> str:
    return f"{layer_name}:{index}"


def build_feature_index(layers: MapLayers) -> Dict[str, dict]:
    """Map feature ids (as stamped on rendered copies) to the loaded features."""
    return {
        make_feature_id(layer_name, index): feature
        for layer_name, index, feature in layers.iter_features()
    }


def count_by_name_type(layers: MapLayers) -> pd.DataFrame:
    """
    Count loaded features per name type for the legend.

    Unknown or missing name types are not counted (they are not in the legend).

    Returns:
        DataFrame with 'name_type' and 'count' columns, one row per known
        name type in legend order (zero counts included)
    """
    name_types = [get_name_type(feature) for _, _, feature in layers.iter_features()]
    counts = pd.Series(name_types, dtype='object').value_counts()

    return pd.DataFrame({
        'name_type': list(NAME_TYPE_COLORS.keys()),
        'count': [int(counts.get(name_type, 0)) for name_type in NAME_TYPE_COLORS],
    })
