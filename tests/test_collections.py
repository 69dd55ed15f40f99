import pytest

from wkbstructures import *
from wkbstructures._const import HASH_SEED


def test_geometrycollection_init():
    point = Point(1., 2.)
    line = LineString([(0., 0.), (1., 1.)])
    gc = GeometryCollection([point, line])
    assert gc.geometry_count == len(gc) == 2
    assert gc[0] is point
    assert list(gc) == [point, line]
    assert gc.identifier == WkbIdentifier.GEOMETRYCOLLECTION == 7

    # Collections may nest
    nested = GeometryCollection([gc, GeometryCollection([])])
    assert nested[0][1] == line

    with pytest.raises(TypeError):
        GeometryCollection(None)

    with pytest.raises(TypeError):
        GeometryCollection([point, (1., 2.)])

    with pytest.raises(IndexOutOfRangeError):
        _ = gc[2]


def test_geometrycollection_eq():
    gc = GeometryCollection([Point(1., 2.), LineString([(0., 0.), (1., 1.)])])
    assert gc == GeometryCollection([Point(1., 2.), LineString([(0., 0.), (1., 1.)])])
    assert gc != GeometryCollection([LineString([(0., 0.), (1., 1.)]), Point(1., 2.)])
    assert gc != GeometryCollection([Point(1., 2.)])

    # Heterogeneous members compare by variant too
    assert GeometryCollection([MultiPoint([(0., 0.)])]) != GeometryCollection([Point(0., 0.)])
    assert GeometryCollection([]) == GeometryCollection([])


def test_geometrycollection_hash():
    gc = GeometryCollection([Point(1., 2.), LineString([(0., 0.), (1., 1.)])])
    assert hash(gc) == hash(GeometryCollection([Point(1., 2.), LineString([(0., 0.), (1., 1.)])]))
    assert hash(GeometryCollection([])) == HASH_SEED


def test_geometrycollection_repr():
    assert repr(GeometryCollection([])) == '<GeometryCollection of 0 geometries>'
    assert repr(GeometryCollection([Point(0., 0.)])) == '<GeometryCollection of 1 geometry>'


def test_geometrycollection_byte_length():
    assert GeometryCollection([]).byte_length() == 9
    assert GeometryCollection([], srid=4326).byte_length() == 13

    gc = GeometryCollection([
        Point(1., 2., srid=4326),
        MultiPoint([(0., 0.), (1., 1.)]),
        GeometryCollection([LineString([(0., 0.)])]),
    ])
    assert gc.byte_length() == 9 + 21 + (9 + 2 * 21) + (9 + (9 + 16))


def test_geometrycollection_bounds():
    gc = GeometryCollection([
        Point(5., 2.),
        GeometryCollection([LineString([(0., -1.), (1., 1.)])]),
    ])
    assert gc.bounds == (0., -1., 5., 2.)
    assert list(gc.iter_coordinates()) == [
        Coordinate2D(5., 2.), Coordinate2D(0., -1.), Coordinate2D(1., 1.)
    ]

    with pytest.raises(ValueError):
        _ = GeometryCollection([GeometryCollection([])]).bounds


def test_geometrycollection_copy():
    gc = GeometryCollection([Point(1., 2.), GeometryCollection([Point(0., 0.)])], srid=4326)
    gc_copy = gc.copy()
    assert gc_copy == gc
    assert gc_copy.srid == 4326
    assert gc_copy[1] is not gc[1]


def test_geometrycollection_geo_interface():
    gc = GeometryCollection([Point(1., 2.), LineString([(0., 0.), (1., 1.)])])
    assert gc.__geo_interface__ == {
        'type': 'GeometryCollection',
        'geometries': [
            {'type': 'Point', 'coordinates': [1., 2.]},
            {'type': 'LineString', 'coordinates': [[0., 0.], [1., 1.]]},
        ]
    }


def test_geometrycollection_to_wkt():
    gc = GeometryCollection(
        [Point(1., 2., srid=3857), LineString([]), GeometryCollection([])],
        srid=4326
    )
    assert gc.to_wkt() == (
        'SRID=4326;GEOMETRYCOLLECTION(POINT(1.0 2.0),LINESTRING EMPTY,GEOMETRYCOLLECTION EMPTY)'
    )
    assert GeometryCollection([]).to_wkt() == 'GEOMETRYCOLLECTION EMPTY'


def test_geometrycollection_to_shapely():
    import shapely

    gc = GeometryCollection([Point(1., 2.), LineString([(0., 0.), (1., 1.)])])
    shp = gc.to_shapely()
    assert isinstance(shp, shapely.geometry.GeometryCollection)
    assert len(shp.geoms) == 2
