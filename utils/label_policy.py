"""
District label visibility.

Districts carry a permanent name label when the map is zoomed in far enough,
or when the district is large enough to fit its name at any zoom. The label
set is always recomputed from scratch; nothing is patched incrementally.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from pyproj import Geod
from shapely.errors import GEOSException
from shapely.geometry import Polygon, shape
from shapely.geometry.polygon import orient

logger = logging.getLogger(__name__)

# Zoom at which every named district is labeled
LABEL_MIN_ZOOM = 15

# Districts larger than this are labeled at any zoom (1 km²)
LABEL_MIN_AREA_M2 = 1_000_000

# WGS84 geodesic area, same convention as turf.js / Leaflet
GEOD = Geod(ellps='WGS84')


@dataclass(frozen=True)
class DistrictLabel:
    """A district selected for a permanent label."""

    name: str
    area_m2: float
    latitude: float
    longitude: float


def polygon_area_m2(polygon: Polygon) -> float:
    """
    Geodesic area of one polygon in m², holes subtracted.

    Rings are re-oriented first (exterior counter-clockwise, holes clockwise):
    pyproj adds the signed area of every ring, so a hole wound like its
    exterior would otherwise be added instead of subtracted.
    """
    area, _ = GEOD.geometry_area_perimeter(orient(polygon, sign=1.0))
    return abs(area)


def geodesic_area_m2(geometry: Optional[dict]) -> float:
    """
    Geodesic area of a GeoJSON geometry in square meters.

    Polygons and multipolygons are measured on the WGS84 ellipsoid.
    Anything else (points, lines, empty or broken geometries) has area 0.

    Args:
        geometry: GeoJSON geometry dict (lon/lat coordinates)

    Returns:
        Area in m² (always >= 0)
    """
    if not geometry or geometry.get('type') not in ('Polygon', 'MultiPolygon'):
        return 0.0

    try:
        geom = shape(geometry)
    except (GEOSException, ValueError, TypeError, IndexError, KeyError) as e:
        logger.warning(f"Could not build geometry for area calculation: {e}")
        return 0.0

    if geom.is_empty:
        return 0.0

    parts = [geom] if geom.geom_type == 'Polygon' else list(geom.geoms)
    return float(sum(polygon_area_m2(part) for part in parts))


def label_anchor(geometry: dict) -> Optional[Tuple[float, float]]:
    """
    Point to center a district label on, as (lat, lon).

    Uses a representative point, which always lies inside the polygon
    (unlike the centroid of a concave or multi-part district).
    """
    try:
        geom = shape(geometry)
    except (GEOSException, ValueError, TypeError, IndexError, KeyError):
        return None

    if geom.is_empty:
        return None

    point = geom.representative_point()
    return point.y, point.x


def should_label(area_m2: float, zoom: float) -> bool:
    """Label rule: zoomed in enough, or large enough."""
    return zoom >= LABEL_MIN_ZOOM or area_m2 > LABEL_MIN_AREA_M2


def select_labeled_districts(
    districts: Optional[Iterable[dict]],
    zoom: float
) -> List[DistrictLabel]:
    """
    Pick the districts that get a permanent label at the given zoom.

    Districts without a name are skipped entirely. Order follows the input
    collection, so the same inputs always produce the same list.

    Args:
        districts: District features (None if the layer failed to load)
        zoom: Current map zoom level

    Returns:
        List of DistrictLabel for the visible labels
    """
    if not districts:
        return []

    labels = []
    for feature in districts:
        name = (feature.get('properties') or {}).get('name')
        if not name:
            continue

        geometry = feature.get('geometry')
        area = geodesic_area_m2(geometry)
        if not should_label(area, zoom):
            continue

        anchor = label_anchor(geometry) if geometry else None
        if anchor is None:
            # Nowhere to put the label
            continue

        labels.append(DistrictLabel(
            name=str(name),
            area_m2=area,
            latitude=anchor[0],
            longitude=anchor[1],
        ))

    return labels
