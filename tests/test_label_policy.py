"""Tests for district label visibility."""

import pytest

from utils.label_policy import (
    LABEL_MIN_AREA_M2,
    LABEL_MIN_ZOOM,
    geodesic_area_m2,
    label_anchor,
    select_labeled_districts,
    should_label,
)

from tests.helpers import make_feature, make_square


# =============================================================================
# TestGeodesicArea
# =============================================================================


class TestGeodesicArea:
    def test_one_degree_cell_at_equator(self):
        # WGS84 1°x1° cell at the equator is ~12,309 km²
        geometry = {'type': 'Polygon', 'coordinates': make_square(0, 0, 1, 1)}
        assert geodesic_area_m2(geometry) == pytest.approx(1.2309e10, rel=1e-3)

    def test_orientation_does_not_matter(self):
        ring = make_square(56.26, 58.005, 0.03, 0.02)
        reversed_ring = [list(reversed(ring[0]))]
        a = geodesic_area_m2({'type': 'Polygon', 'coordinates': ring})
        b = geodesic_area_m2({'type': 'Polygon', 'coordinates': reversed_ring})
        assert a > 0
        assert a == pytest.approx(b)

    @pytest.mark.parametrize('reverse_hole', [False, True])
    def test_hole_subtracted_in_either_winding(self, reverse_hole):
        outer = make_square(56.25, 58.00, 0.02, 0.02)[0]
        hole = make_square(56.255, 58.005, 0.01, 0.01)[0]
        if reverse_hole:
            hole = list(reversed(hole))

        solid = geodesic_area_m2({'type': 'Polygon', 'coordinates': [outer]})
        hole_area = geodesic_area_m2({'type': 'Polygon', 'coordinates': [hole]})
        with_hole = geodesic_area_m2({'type': 'Polygon', 'coordinates': [outer, hole]})

        assert with_hole == pytest.approx(solid - hole_area, rel=1e-6)

    def test_hole_subtracted_in_multipolygon_part(self):
        outer = make_square(56.25, 58.00, 0.02, 0.02)[0]
        hole = make_square(56.255, 58.005, 0.01, 0.01)[0]
        polygon = geodesic_area_m2({'type': 'Polygon', 'coordinates': [outer, hole]})
        multi = geodesic_area_m2({'type': 'MultiPolygon', 'coordinates': [[outer, hole]]})
        assert multi == pytest.approx(polygon, rel=1e-6)
        assert multi < geodesic_area_m2({'type': 'Polygon', 'coordinates': [outer]})

    def test_multipolygon_sums_parts(self):
        part_a = make_square(56.20, 58.00, 0.01, 0.01)
        part_b = make_square(56.30, 58.00, 0.01, 0.01)
        single = geodesic_area_m2({'type': 'Polygon', 'coordinates': part_a})
        multi = geodesic_area_m2({'type': 'MultiPolygon', 'coordinates': [part_a, part_b]})
        assert multi == pytest.approx(2 * single, rel=1e-3)

    @pytest.mark.parametrize('geometry', [
        None,
        {'type': 'Point', 'coordinates': [56.25, 58.01]},
        {'type': 'LineString', 'coordinates': [[56.25, 58.01], [56.26, 58.02]]},
        {'type': 'Polygon', 'coordinates': []},
    ])
    def test_non_area_geometry_is_zero(self, geometry):
        assert geodesic_area_m2(geometry) == 0.0


# =============================================================================
# TestShouldLabel
# =============================================================================


class TestShouldLabel:
    def test_zoom_threshold(self):
        assert should_label(0, LABEL_MIN_ZOOM) is True
        assert should_label(0, LABEL_MIN_ZOOM - 0.01) is False

    def test_area_threshold_is_strict(self):
        assert should_label(LABEL_MIN_AREA_M2, 12) is False
        assert should_label(LABEL_MIN_AREA_M2 + 1, 12) is True


# =============================================================================
# TestSelectLabeledDistricts
# =============================================================================


class TestSelectLabeledDistricts:
    def test_large_district_labeled_at_any_zoom(self, large_district):
        labels = select_labeled_districts([large_district], 10)
        assert [label.name for label in labels] == ['Разгуляй']
        assert labels[0].area_m2 > 1_000_000

    def test_small_district_only_when_zoomed_in(self, small_district):
        assert select_labeled_districts([small_district], 14) == []
        labels = select_labeled_districts([small_district], 15)
        assert [label.name for label in labels] == ['Треугольник']

    def test_nameless_district_never_labeled(self, large_district):
        nameless = dict(large_district, properties={})
        empty_name = dict(large_district, properties={'name': ''})
        assert select_labeled_districts([nameless, empty_name], 18) == []

    def test_keeps_collection_order(self, large_district, small_district):
        labels = select_labeled_districts([small_district, large_district], 16)
        assert [label.name for label in labels] == ['Треугольник', 'Разгуляй']

    def test_idempotent(self, large_district, small_district):
        districts = (large_district, small_district)
        assert select_labeled_districts(districts, 13) == select_labeled_districts(districts, 13)

    def test_recompute_drops_previous_labels(self, large_district, small_district):
        districts = (large_district, small_district)
        zoomed_in = select_labeled_districts(districts, 16)
        zoomed_out = select_labeled_districts(districts, 12)
        assert len(zoomed_in) == 2
        assert [label.name for label in zoomed_out] == ['Разгуляй']

    @pytest.mark.parametrize('districts', [None, ()])
    def test_missing_layer(self, districts):
        assert select_labeled_districts(districts, 16) == []

    def test_label_anchor_inside_district(self, large_district):
        lat, lon = label_anchor(large_district['geometry'])
        assert 58.005 < lat < 58.025
        assert 56.26 < lon < 56.29

    def test_district_without_geometry_skipped(self):
        feature = make_feature(None, name='Пусто')
        assert select_labeled_districts([feature], 18) == []
