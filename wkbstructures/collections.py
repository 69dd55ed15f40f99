"""
Heterogeneous collections of geometries
"""

__all__ = ['GeometryCollection']

from typing import Iterable, Iterator, Tuple

from wkbstructures._base import BaseGeometry, MultiGeometryBase
from wkbstructures._const import WkbIdentifier


class GeometryCollection(MultiGeometryBase):

    """
    An ordered collection of any geometries, including other collections.

    Only the SRID of the collection itself is encoded; SRIDs set on member
    geometries are not written.

    Args:
        geometries:
            Any finite iterable of geometries

        srid:
            The Spatial Reference System Identifier; 0 if unspecified
    """

    identifier = WkbIdentifier.GEOMETRYCOLLECTION

    def __init__(self, geometries: Iterable[BaseGeometry], srid: int = 0):
        super().__init__(srid)
        if geometries is None:
            raise TypeError('GeometryCollection geometries must not be None')

        self._items: Tuple[BaseGeometry, ...] = tuple(geometries)
        for geometry in self._items:
            if not isinstance(geometry, BaseGeometry):
                raise TypeError(
                    f'GeometryCollection members must be geometries, not '
                    f'{type(geometry).__name__}'
                )

    @property
    def __geo_interface__(self):
        return {
            'type': 'GeometryCollection',
            'geometries': [x.__geo_interface__ for x in self._items],
        }

    def __repr__(self):
        pl = "ies" if len(self._items) != 1 else "y"
        return f'<GeometryCollection of {len(self._items)} geometr{pl}>'

    @property
    def geometry_count(self) -> int:
        return len(self._items)

    def _wkt_parts(self) -> Iterator[str]:
        return (x._wkt() for x in self._items)

    def copy(self) -> 'GeometryCollection':
        return GeometryCollection([x.copy() for x in self._items], srid=self.srid)
