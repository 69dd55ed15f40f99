import sys

from wkbstructures._version import __version__  # noqa: F401
from wkbstructures.utils.logging import LOGGER
from wkbstructures._const import EwkbModifier, WkbIdentifier
from wkbstructures.coordinates import Coordinate2D
from wkbstructures.errors import (
    BufferTooSmallError, IndexOutOfRangeError, TruncatedInputError,
    UnknownTypeTagError, UnsupportedDimensionError, WkbDecodeError, WkbError
)
from wkbstructures.structures import LineString, Point, Polygon
from wkbstructures.multistructures import MultiLineString, MultiPoint, MultiPolygon
from wkbstructures.collections import GeometryCollection
from wkbstructures.wkb import decode, dumps, encode, loads
from wkbstructures.utils.conditional_imports import ConditionalPackageInterceptor


ConditionalPackageInterceptor.permit_packages(
    {
        'shapely': 'wkbstructures[shapely]',
    }
)
sys.meta_path.append(ConditionalPackageInterceptor)  # type: ignore

__all__ = [
    'BufferTooSmallError',
    'Coordinate2D',
    'EwkbModifier',
    'GeometryCollection',
    'IndexOutOfRangeError',
    'LineString',
    'MultiLineString',
    'MultiPoint',
    'MultiPolygon',
    'Point',
    'Polygon',
    'TruncatedInputError',
    'UnknownTypeTagError',
    'UnsupportedDimensionError',
    'WkbDecodeError',
    'WkbError',
    'WkbIdentifier',
    'decode',
    'dumps',
    'encode',
    'loads',
    'LOGGER',
]
