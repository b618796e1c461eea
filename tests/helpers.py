"""GeoJSON builders shared by the tests."""


def make_square(lon, lat, dlon, dlat):
    """Closed lon/lat ring for a rectangle with its south-west corner at (lon, lat)."""
    return [[
        [lon, lat],
        [lon + dlon, lat],
        [lon + dlon, lat + dlat],
        [lon, lat + dlat],
        [lon, lat],
    ]]


def make_feature(geometry, **properties):
    return {'type': 'Feature', 'geometry': geometry, 'properties': properties}
