__all__ = ['MultiLineString', 'MultiPoint', 'MultiPolygon']


from typing import Iterable, Iterator, Tuple, Union

from wkbstructures._base import MultiGeometryBase, SequenceGeometryBase
from wkbstructures._const import POINT_SIZE, UINT32_SIZE, WkbIdentifier
from wkbstructures.coordinates import Coordinate2D, CoordinateLike
from wkbstructures.structures import LineString, Point, Polygon


class MultiPoint(SequenceGeometryBase):

    """
    An ordered collection of points, stored as coordinates.

    Each point is encoded as a complete nested Point structure (with its own
    byte order marker and type word), so every element occupies 21 bytes
    rather than the 16 bytes of a linestring vertex.

    Args:
        points:
            Any finite iterable of Coordinate2D, (x, y) pairs or Points

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.MULTIPOINT
    _item_label = 'point'

    def __init__(self, points: Iterable[Union[CoordinateLike, Point]], srid: int = 0):
        super().__init__(srid)
        if points is None:
            raise TypeError('MultiPoint points must not be None')

        self._items: Tuple[Coordinate2D, ...] = self._to_coordinates(
            point.coordinate if isinstance(point, Point) else point
            for point in points
        )

    @property
    def __geo_interface__(self):
        return {
            'type': 'MultiPoint',
            'coordinates': [list(point.to_float()) for point in self._items],
        }

    def __repr__(self):
        pl = "s" if len(self._items) != 1 else ""
        return f'<MultiPoint of {len(self._items)} point{pl}>'

    @property
    def geoshapes(self) -> Tuple[Point, ...]:
        """The points as standalone Point geometries"""
        return tuple(Point(*point.to_float()) for point in self._items)

    @property
    def point_count(self) -> int:
        return len(self._items)

    def _body_length(self) -> int:
        return UINT32_SIZE + len(self._items) * POINT_SIZE

    def _wkt(self) -> str:
        if not self._items:
            return 'MULTIPOINT EMPTY'

        points = ",".join(f'({" ".join(point.to_str())})' for point in self._items)
        return f'MULTIPOINT({points})'

    def copy(self) -> 'MultiPoint':
        return MultiPoint(self._items, srid=self.srid)

    def iter_coordinates(self) -> Iterator[Coordinate2D]:
        return iter(self._items)


class MultiLineString(MultiGeometryBase):

    """
    An ordered collection of linestrings.

    Args:
        linestrings:
            Any finite iterable of LineStrings, or of coordinate sequences which
            will be converted to LineStrings

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.MULTILINESTRING
    _item_label = 'linestring'

    def __init__(
        self,
        linestrings: Iterable[Union[LineString, Iterable[CoordinateLike]]],
        srid: int = 0
    ):
        super().__init__(srid)
        if linestrings is None:
            raise TypeError('MultiLineString linestrings must not be None')

        self._items: Tuple[LineString, ...] = tuple(
            line if isinstance(line, LineString) else LineString(line)
            for line in linestrings
        )

    @property
    def __geo_interface__(self):
        return {
            'type': 'MultiLineString',
            'coordinates': [
                [list(vertex.to_float()) for vertex in line]
                for line in self._items
            ]
        }

    def __repr__(self):
        pl = "s" if len(self._items) != 1 else ""
        return f'<MultiLineString of {len(self._items)} linestring{pl}>'

    @property
    def line_count(self) -> int:
        return len(self._items)

    def copy(self) -> 'MultiLineString':
        return MultiLineString([x.copy() for x in self._items], srid=self.srid)


class MultiPolygon(MultiGeometryBase):

    """
    An ordered collection of polygons.

    Args:
        polygons:
            Any finite iterable of Polygons, or of ring lists which will be
            converted to Polygons

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.MULTIPOLYGON
    _item_label = 'polygon'

    def __init__(
        self,
        polygons: Iterable[Union[Polygon, Iterable[Iterable[CoordinateLike]]]],
        srid: int = 0
    ):
        super().__init__(srid)
        if polygons is None:
            raise TypeError('MultiPolygon polygons must not be None')

        self._items: Tuple[Polygon, ...] = tuple(
            polygon if isinstance(polygon, Polygon) else Polygon(polygon)
            for polygon in polygons
        )

    @property
    def __geo_interface__(self):
        return {
            'type': 'MultiPolygon',
            'coordinates': [
                polygon.__geo_interface__['coordinates']
                for polygon in self._items
            ]
        }

    def __repr__(self):
        pl = "s" if len(self._items) != 1 else ""
        return f'<MultiPolygon of {len(self._items)} polygon{pl}>'

    @property
    def polygon_count(self) -> int:
        return len(self._items)

    def copy(self) -> 'MultiPolygon':
        return MultiPolygon([x.copy() for x in self._items], srid=self.srid)
