"""Module for parsing external representations into wkbstructures"""

__all__ = [
    'parse_geo_interface', 'parse_wkb'
]

import re
from typing import Any, Callable, Dict, Union

from wkbstructures.collections import GeometryCollection
from wkbstructures.multistructures import MultiLineString, MultiPoint, MultiPolygon
from wkbstructures.structures import LineString, Point, Polygon
from wkbstructures.typing import Geometry
from wkbstructures.wkb import loads

_RE_HEX = re.compile(r'^(?:[0-9a-fA-F]{2})+$')


def _point_from_coordinates(coords) -> Point:
    return Point(*coords[:2])


_PARSER_MAP: Dict[str, Callable[[Any], Geometry]] = {
    'POINT': _point_from_coordinates,
    'LINESTRING': LineString,
    'POLYGON': Polygon,
    'MULTIPOINT': MultiPoint,
    'MULTILINESTRING': MultiLineString,
    'MULTIPOLYGON': MultiPolygon,
}


def parse_geo_interface(obj: Union[Dict[str, Any], Any], srid: int = 0) -> Geometry:
    """
    Parses a GeoJSON-like geometry mapping (or any object exposing
    __geo_interface__, e.g. a shapely geometry) into its corresponding
    wkbstructure. Z values, if present, are discarded.

    Args:
        obj:
            A mapping with 'type' and 'coordinates' (or 'geometries') keys, or
            an object with a __geo_interface__ property

        srid:
            The SRID to assign to the resulting geometry

    Returns:
        Geometry, subtype determined by input
    """
    geom = getattr(obj, '__geo_interface__', obj)
    if not isinstance(geom, dict) or 'type' not in geom:
        raise ValueError('Failed to parse geo interface; expected a geometry mapping.')

    geom_type = str(geom['type']).upper()
    if geom_type == 'GEOMETRYCOLLECTION':
        return GeometryCollection(
            [parse_geo_interface(x) for x in geom.get('geometries', [])],
            srid=srid
        )

    if geom_type not in _PARSER_MAP:
        raise ValueError(f'Unsupported geometry type {geom["type"]!r}.')

    coords = _strip_z(geom.get('coordinates', []))
    shape = _PARSER_MAP[geom_type](coords)
    shape.srid = srid
    return shape


def _strip_z(coords):
    """Recursively truncates positions to their first two values"""
    if coords and isinstance(coords[0], (int, float)):
        return tuple(coords[:2])

    return [_strip_z(x) for x in coords]


def parse_wkb(wkb: Union[bytes, bytearray, memoryview, str]) -> Geometry:
    """
    Parses (E)WKB into its corresponding wkbstructure.

    Args:
        wkb:
            Either raw (E)WKB bytes or a hex string, as PostGIS renders
            geometries in text form

    Returns:
        Geometry, subtype determined by input
    """
    if isinstance(wkb, str):
        if not _RE_HEX.match(wkb):
            raise ValueError('Invalid hex-encoded WKB.')

        wkb = bytes.fromhex(wkb)

    return loads(wkb)
