"""
Base class declarations for wkbstructures
"""

from __future__ import annotations

from abc import abstractmethod, ABC
from typing import (
    Any, ClassVar, Dict, Iterable, Iterator, Tuple, TYPE_CHECKING, TypeVar
)
from typing_extensions import Self

import numpy as np

from wkbstructures._const import (
    DEFAULT_BYTE_ORDER, HEADER_SIZE, MAX_SRID, SRID_SIZE, UINT32_SIZE, WkbIdentifier
)
from wkbstructures.coordinates import Coordinate2D, CoordinateLike
from wkbstructures.utils.functions import combine_hashes, get_item

if TYPE_CHECKING:  # pragma: no cover
    import shapely


GEOMETRY_VAR = TypeVar('GEOMETRY_VAR', bound='BaseGeometry')


def _elements_equal(left: Tuple, right: Tuple) -> bool:
    """
    Compares nested tuples item by item. Tuple equality treats identical
    objects as equal, which would make a NaN coordinate equal to itself.
    """
    if len(left) != len(right):
        return False

    for _left, _right in zip(left, right):
        if isinstance(_left, tuple) and isinstance(_right, tuple):
            if not _elements_equal(_left, _right):
                return False
        elif not _left == _right:
            return False

    return True


class BaseGeometry(ABC):

    """
    A geometry value which can be encoded to, and decoded from, (E)WKB.

    Geometries are immutable once constructed; the SRID is the only attribute
    that may be changed afterwards. Equality and hashing are structural and
    ignore the SRID.
    """

    identifier: ClassVar[WkbIdentifier]

    def __init__(self, srid: int = 0):
        self._srid = 0
        self.srid = srid

    def __eq__(self, other):
        if type(other) is not type(self):
            return False

        return _elements_equal(self._elements(), other._elements())

    def __hash__(self) -> int:
        return combine_hashes(hash(x) for x in self._hash_elements())

    @abstractmethod
    def __repr__(self):
        """REPL representation of this object"""

    @property
    @abstractmethod
    def __geo_interface__(self) -> Dict[str, Any]:
        pass

    @property
    def srid(self) -> int:
        """The Spatial Reference System Identifier (0 if unspecified)"""
        return self._srid

    @srid.setter
    def srid(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'SRID must be an int, not {type(value).__name__}')

        if not 0 <= value <= MAX_SRID:
            raise ValueError(f'SRID must be an unsigned 32-bit integer; received {value}')

        self._srid = value

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """
        The x and y min/max bounds of the geometry.

        Returns:
            (min_x, min_y, max_x, max_y)
        """
        arr = np.array(
            [coord.to_float() for coord in self.iter_coordinates()],
            dtype=np.float64
        )
        if not arr.size:
            raise ValueError(f'{self.__class__.__name__} is empty and has no bounds.')

        min_x, min_y = arr.min(axis=0)
        max_x, max_y = arr.max(axis=0)
        return float(min_x), float(min_y), float(max_x), float(max_y)

    @property
    def is_empty(self) -> bool:
        """True if the geometry holds no coordinates at all"""
        return next(iter(self.iter_coordinates()), None) is None

    @abstractmethod
    def _body_length(self) -> int:
        """The encoded length of the geometry, not counting its header"""

    @abstractmethod
    def _elements(self) -> Tuple:
        """The owned contents of the geometry, compared for equality"""

    def _hash_elements(self) -> Iterable:
        """The values folded into this geometry's hash, in order"""
        return self._elements()

    @staticmethod
    def _to_coordinates(values: Iterable[CoordinateLike]) -> Tuple[Coordinate2D, ...]:
        if values is None:
            raise TypeError('Coordinate sequences must not be None')

        return tuple(Coordinate2D.from_value(value) for value in values)

    @abstractmethod
    def _wkt(self) -> str:
        """The WKT representation of the geometry, without an SRID prefix"""

    def byte_length(self) -> int:
        """
        The total number of bytes required to encode this geometry as (E)WKB:

            1 byte for the byte order marker
          + 4 bytes for the type word
         (+ 4 bytes for the SRID, if one is set)
          + the body

        Returns:
            int
        """
        return HEADER_SIZE + (SRID_SIZE if self.srid else 0) + self._body_length()

    def nested_byte_length(self) -> int:
        """
        The number of bytes this geometry occupies when nested inside a multi-geometry
        or collection, where no SRID is written.
        """
        return HEADER_SIZE + self._body_length()

    @abstractmethod
    def copy(self: GEOMETRY_VAR) -> GEOMETRY_VAR:
        """Produces a copy of the geometry, including its SRID"""

    @abstractmethod
    def iter_coordinates(self) -> Iterator[Coordinate2D]:
        """Iterates over every coordinate in the geometry, depth-first"""

    @classmethod
    def from_hex(cls, hex_str: str) -> Self:
        """
        Create a geometry from hex-encoded (E)WKB, as PostGIS renders geometries
        in text form.

        Args:
            hex_str:
                A hexadecimal string, in either case

        Returns:
            A geometry of this type
        """
        return cls.from_wkb(bytes.fromhex(hex_str))

    @classmethod
    def from_wkb(cls, data: bytes) -> Self:
        """
        Create a geometry from (E)WKB bytes.

        Args:
            data:
                A bytes-like object containing exactly one encoded geometry

        Returns:
            A geometry of this type
        """
        from wkbstructures.wkb import loads

        geometry = loads(data)
        if not isinstance(geometry, cls):
            raise ValueError(
                f'Geometry represents a {geometry.__class__.__name__}; '
                f'expected {cls.__name__}.'
            )

        return geometry

    def to_hex(self, byteorder: str = DEFAULT_BYTE_ORDER) -> str:
        """The (E)WKB encoding of this geometry as an uppercase hex string"""
        return self.to_wkb(byteorder).hex().upper()

    def to_shapely(self) -> shapely.geometry.base.BaseGeometry:
        """
        Converts the geometry into a Shapely geometry. The SRID is not carried over.
        """
        import shapely.geometry  # pylint: disable=import-outside-toplevel

        return shapely.geometry.shape(self.__geo_interface__)

    def to_wkb(self, byteorder: str = DEFAULT_BYTE_ORDER) -> bytes:
        """
        Encodes the geometry as (E)WKB. An SRID is included only if one is set.

        Args:
            byteorder:
                Either 'little' or 'big'

        Returns:
            bytes
        """
        from wkbstructures.wkb import dumps

        return dumps(self, byteorder=byteorder)

    def to_wkt(self) -> str:
        """
        Converts the geometry to its WKT string representation, prefixed with
        'SRID=<srid>;' (EWKT) if an SRID is set.

        Returns:
            str
        """
        if self.srid:
            return f'SRID={self.srid};{self._wkt()}'

        return self._wkt()

    @staticmethod
    def _coords_to_wkt(coords: Iterable[Coordinate2D]) -> str:
        """Converts coordinates to a parenthesized WKT list, e.g. '(0.0 0.0,1.0 1.0)'"""
        return f'({",".join(" ".join(coord.to_str()) for coord in coords)})'


class SequenceGeometryBase(BaseGeometry, ABC):

    """
    A geometry backed by an ordered, immutable sequence of items (coordinates,
    rings or child geometries).
    """

    _items: Tuple
    _item_label: ClassVar[str] = 'element'

    def __getitem__(self, index):
        return get_item(self._items, index, self._item_label)

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _elements(self) -> Tuple:
        return self._items


class MultiGeometryBase(SequenceGeometryBase, ABC):

    """
    A geometry whose items are themselves geometries, each encoded as a
    complete nested (E)WKB structure.
    """

    _item_label = 'geometry'

    @property
    def geoshapes(self) -> Tuple[BaseGeometry, ...]:
        """The child geometries"""
        return self._items

    def _body_length(self) -> int:
        return UINT32_SIZE + sum(x.nested_byte_length() for x in self._items)

    def iter_coordinates(self) -> Iterator[Coordinate2D]:
        for geometry in self._items:
            yield from geometry.iter_coordinates()

    def _wkt(self) -> str:
        if not self._items:
            return f'{self.identifier.name} EMPTY'

        return f'{self.identifier.name}({",".join(self._wkt_parts())})'

    def _wkt_parts(self) -> Iterator[str]:
        """The WKT of each child, without its type name"""
        for geometry in self._items:
            yield geometry._wkt()[len(geometry.identifier.name):].strip()
