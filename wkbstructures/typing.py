"""Module for wkbstructures type hinting"""

__all__ = [
    'Geometry', 'MultiGeometry', 'SequenceGeometry',
]

from wkbstructures._base import (
    BaseGeometry,
    MultiGeometryBase,
    SequenceGeometryBase,
)

# Any geometry
Geometry = BaseGeometry

# Geometries backed by a sequence (everything except Point)
SequenceGeometry = SequenceGeometryBase

# Geometries whose members are themselves encoded as nested geometries
# (MultiLineString, MultiPolygon, GeometryCollection)
MultiGeometry = MultiGeometryBase
