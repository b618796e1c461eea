"""Shared fixtures: small GeoJSON features around central Perm."""

import pytest

from utils.color_schemes import NAME_TYPE_FIELD

from tests.helpers import make_feature, make_square


@pytest.fixture
def large_district():
    # ~1.8 km x 2.2 km, about 3.9 km²
    return make_feature(
        {'type': 'Polygon', 'coordinates': make_square(56.26, 58.005, 0.03, 0.02)},
        name='Разгуляй',
        **{NAME_TYPE_FIELD: 'Историческая ассоциация'},
    )


@pytest.fixture
def small_district():
    # ~180 m x 220 m, about 0.04 km²
    return make_feature(
        {'type': 'Polygon', 'coordinates': make_square(56.245, 58.001, 0.003, 0.002)},
        name='Треугольник',
        **{NAME_TYPE_FIELD: 'Визуальная ассоциация'},
    )


@pytest.fixture
def point_feature():
    return make_feature(
        {'type': 'Point', 'coordinates': [56.2385, 58.0089]},
        name='Башня смерти',
        original_name='Здание ГУВД',
        explainer='Первое. Второе. Третье. Четвёртое.',
        **{NAME_TYPE_FIELD: 'Историческая ассоциация'},
    )


@pytest.fixture
def line_feature():
    return make_feature(
        {'type': 'LineString', 'coordinates': [[56.2461, 58.0158], [56.2362, 57.9990]]},
        name='Компрос',
        explainer='Короткое объяснение.',
        **{NAME_TYPE_FIELD: 'Ассоциация с официальным названием'},
    )
