"""
Single-part geometries: points, linestrings and polygons
"""

__all__ = ['LineString', 'Point', 'Polygon']

from typing import Iterable, Iterator, Tuple

from wkbstructures._base import BaseGeometry, SequenceGeometryBase
from wkbstructures._const import COORDINATE_SIZE, UINT32_SIZE, WkbIdentifier
from wkbstructures.coordinates import Coordinate2D, CoordinateLike
from wkbstructures.utils.functions import get_item


class Point(BaseGeometry):

    """
    A single 2D position.

    Args:
        x:
            The x coordinate (e.g. longitude)

        y:
            The y coordinate (e.g. latitude)

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.POINT

    def __init__(self, x: float, y: float, srid: int = 0):
        super().__init__(srid)
        self._coordinate = Coordinate2D(x, y)

    def __hash__(self) -> int:
        return hash(self._coordinate)

    @property
    def __geo_interface__(self):
        return {
            'type': 'Point',
            'coordinates': list(self._coordinate.to_float()),
        }

    def __repr__(self) -> str:
        return f'<Point at {self._coordinate.to_float()}>'

    @property
    def coordinate(self) -> Coordinate2D:
        return self._coordinate

    @property
    def x(self) -> float:
        return self._coordinate.x

    @property
    def y(self) -> float:
        return self._coordinate.y

    def _body_length(self) -> int:
        return COORDINATE_SIZE

    def _elements(self) -> Tuple:
        return (self._coordinate, )

    def _wkt(self) -> str:
        return f'POINT({" ".join(self._coordinate.to_str())})'

    def copy(self) -> 'Point':
        return Point(self.x, self.y, srid=self.srid)

    @classmethod
    def from_coordinate(cls, coordinate: CoordinateLike, srid: int = 0) -> 'Point':
        """Create a Point from a Coordinate2D or an (x, y) pair"""
        return Point(*Coordinate2D.from_value(coordinate).to_float(), srid=srid)

    def iter_coordinates(self) -> Iterator[Coordinate2D]:
        yield self._coordinate


class LineString(SequenceGeometryBase):

    """
    An ordered sequence of coordinates. Empty linestrings are permitted.

    Args:
        points:
            Any finite iterable of Coordinate2D (or (x, y) pairs). The values are
            copied at construction.

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.LINESTRING
    _item_label = 'point'

    def __init__(self, points: Iterable[CoordinateLike], srid: int = 0):
        super().__init__(srid)
        self._items: Tuple[Coordinate2D, ...] = self._to_coordinates(points)

    @property
    def __geo_interface__(self):
        return {
            'type': 'LineString',
            'coordinates': [list(point.to_float()) for point in self._items],
        }

    def __repr__(self) -> str:
        pl = "s" if len(self._items) != 1 else ""
        return f'<LineString of {len(self._items)} point{pl}>'

    @property
    def point_count(self) -> int:
        return len(self._items)

    @property
    def vertices(self) -> Tuple[Coordinate2D, ...]:
        return self._items

    def _body_length(self) -> int:
        return UINT32_SIZE + len(self._items) * COORDINATE_SIZE

    def _wkt(self) -> str:
        if not self._items:
            return 'LINESTRING EMPTY'

        return f'LINESTRING{self._coords_to_wkt(self._items)}'

    def copy(self) -> 'LineString':
        return LineString(self._items, srid=self.srid)

    def iter_coordinates(self) -> Iterator[Coordinate2D]:
        return iter(self._items)


class Polygon(SequenceGeometryBase):

    """
    A polygon, as an ordered sequence of rings. By convention the first ring is
    the exterior shell and any following rings are holes; neither closure nor
    orientation is checked.

    Indexing with a single int returns a ring; indexing with a (ring, point)
    pair returns a single coordinate.

    Args:
        rings:
            Any finite iterable of rings, each a finite iterable of Coordinate2D
            (or (x, y) pairs). The values are copied at construction.

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.POLYGON
    _item_label = 'ring'

    def __init__(self, rings: Iterable[Iterable[CoordinateLike]], srid: int = 0):
        super().__init__(srid)
        if rings is None:
            raise TypeError('Polygon rings must not be None')

        self._items: Tuple[Tuple[Coordinate2D, ...], ...] = tuple(
            self._to_coordinates(ring) for ring in rings
        )

    def __getitem__(self, index):
        if isinstance(index, tuple):
            ring_index, point_index = index
            return get_item(get_item(self._items, ring_index, 'ring'), point_index, 'point')

        return get_item(self._items, index, 'ring')

    @property
    def __geo_interface__(self):
        return {
            'type': 'Polygon',
            'coordinates': [
                [list(point.to_float()) for point in ring]
                for ring in self._items
            ],
        }

    def __repr__(self) -> str:
        pl = "s" if len(self._items) != 1 else ""
        return f'<Polygon of {len(self._items)} ring{pl}>'

    @property
    def rings(self) -> Tuple[Tuple[Coordinate2D, ...], ...]:
        return self._items

    @property
    def ring_count(self) -> int:
        return len(self._items)

    @property
    def total_point_count(self) -> int:
        return sum(len(ring) for ring in self._items)

    def _body_length(self) -> int:
        # ring count, then a point count per ring, then the points themselves
        return (
            UINT32_SIZE
            + len(self._items) * UINT32_SIZE
            + self.total_point_count * COORDINATE_SIZE
        )

    def _hash_elements(self) -> Iterator[Coordinate2D]:
        return self.iter_coordinates()

    def _wkt(self) -> str:
        if not self._items:
            return 'POLYGON EMPTY'

        return f'POLYGON({",".join(self._coords_to_wkt(ring) for ring in self._items)})'

    def copy(self) -> 'Polygon':
        return Polygon(self._items, srid=self.srid)

    def iter_coordinates(self) -> Iterator[Coordinate2D]:
        for ring in self._items:
            yield from ring
