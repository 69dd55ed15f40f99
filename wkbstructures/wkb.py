"""
Encoding and decoding of geometries as OGC Well-Known Binary (WKB), including
the PostGIS extension (EWKB) which stores an SRID after the type word.

Every geometry node is written as:

    byte 0      byte order marker (1 = little endian, 0 = big endian)
    bytes 1-4   uint32 type tag, OR'd with EWKB flag bits
    bytes 5-8   uint32 SRID, only if the SRID flag bit is set
    ...         the body

Only the outermost geometry may carry an SRID. Geometries nested inside
multi-geometries and collections are plain WKB structures.
"""

__all__ = ['WkbReader', 'WkbWriter', 'decode', 'dumps', 'encode', 'loads']

import struct
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from wkbstructures._base import BaseGeometry
from wkbstructures._const import (
    BIG_ENDIAN, COORDINATE_SIZE, DEFAULT_BYTE_ORDER, EWKB_FLAG_MASK, EWKB_TYPE_MASK,
    HEADER_SIZE, LITTLE_ENDIAN, MAX_NESTING_DEPTH, POINT_SIZE, SRID_SIZE, UINT32_SIZE,
    EwkbModifier, WkbIdentifier
)
from wkbstructures.collections import GeometryCollection
from wkbstructures.coordinates import Coordinate2D
from wkbstructures.errors import (
    BufferTooSmallError, TruncatedInputError, UnknownTypeTagError,
    UnsupportedDimensionError, WkbDecodeError
)
from wkbstructures.multistructures import MultiLineString, MultiPoint, MultiPolygon
from wkbstructures.structures import LineString, Point, Polygon
from wkbstructures.utils.logging import warn_once
from wkbstructures.utils.mixins import LoggingMixin

BufferLike = Union[bytes, bytearray, memoryview]

_BYTE_ORDERS = {
    'little': (LITTLE_ENDIAN, '<'),
    'big': (BIG_ENDIAN, '>'),
}
_MARKER_PREFIXES = {LITTLE_ENDIAN: '<', BIG_ENDIAN: '>'}
_VALID_TAGS = frozenset(int(x) for x in WkbIdentifier)


def _byte_view(buffer: BufferLike) -> memoryview:
    """A flat, byte-addressed view over any buffer-protocol object"""
    view = memoryview(buffer)
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')

    return view


class WkbWriter(LoggingMixin):

    """
    Writes geometries into a caller-supplied buffer. The buffer is never grown;
    size it with geometry.byte_length() beforehand.

    Args:
        buffer:
            A writable bytes-like object (bytearray, writable memoryview, ...)

        byteorder:
            Either 'little' (default) or 'big'. Applies to every node written.
    """

    _BODY_WRITERS = {
        WkbIdentifier.POINT: '_write_point',
        WkbIdentifier.LINESTRING: '_write_linestring',
        WkbIdentifier.POLYGON: '_write_polygon',
        WkbIdentifier.MULTIPOINT: '_write_multipoint',
        WkbIdentifier.MULTILINESTRING: '_write_children',
        WkbIdentifier.MULTIPOLYGON: '_write_children',
        WkbIdentifier.GEOMETRYCOLLECTION: '_write_children',
    }

    def __init__(self, buffer: BufferLike, byteorder: str = DEFAULT_BYTE_ORDER):
        super().__init__()
        if byteorder not in _BYTE_ORDERS:
            raise ValueError(f"byteorder must be either 'little' or 'big', not {byteorder!r}")

        self._view = _byte_view(buffer)
        if self._view.readonly:
            raise TypeError('Cannot encode into a read-only buffer')

        self.marker, prefix = _BYTE_ORDERS[byteorder]
        self._uint32 = struct.Struct(f'{prefix}I')
        self._coordinate = struct.Struct(f'{prefix}dd')
        self._coord_dtype = np.dtype(f'{prefix}f8')

    def write(self, geometry: BaseGeometry, offset: int = 0) -> int:
        """
        Encodes a geometry at the given offset.

        Args:
            geometry:
                Any geometry

            offset:
                The position in the buffer to start writing at

        Returns:
            The number of bytes written, always equal to geometry.byte_length()
        """
        if not isinstance(geometry, BaseGeometry):
            raise TypeError(f'Expected a geometry, not {type(geometry).__name__}')

        if offset < 0:
            raise ValueError(f'Offset must be non-negative; received {offset}')

        required = geometry.byte_length()
        available = len(self._view) - offset
        if available < required:
            raise BufferTooSmallError(
                f'{geometry.__class__.__name__} requires {required} bytes but only '
                f'{max(available, 0)} are available from offset {offset}'
            )

        end = self._write_geometry(geometry, offset, nested=False)
        return end - offset

    def _write_geometry(self, geometry: BaseGeometry, offset: int, nested: bool) -> int:
        srid = geometry.srid
        if nested and srid:
            self.warn_once('SRIDs of nested geometries are not encoded and will be dropped.')
            srid = 0

        offset = self._write_header(geometry.identifier, offset, srid)
        return getattr(self, self._BODY_WRITERS[geometry.identifier])(geometry, offset)

    def _write_header(self, identifier: WkbIdentifier, offset: int, srid: int = 0) -> int:
        type_word = int(identifier)
        if srid:
            type_word |= int(EwkbModifier.HAS_SRID)

        self._view[offset] = self.marker
        self._uint32.pack_into(self._view, offset + 1, type_word)
        offset += HEADER_SIZE

        if srid:
            self._uint32.pack_into(self._view, offset, srid)
            offset += SRID_SIZE

        return offset

    def _write_uint32(self, value: int, offset: int) -> int:
        self._uint32.pack_into(self._view, offset, value)
        return offset + UINT32_SIZE

    def _write_coordinates(self, coords: Sequence[Coordinate2D], offset: int) -> int:
        """Writes a point count followed by the flat (x, y) pairs"""
        offset = self._write_uint32(len(coords), offset)
        if not coords:
            return offset

        data = np.array([coord.to_float() for coord in coords], dtype=self._coord_dtype)
        end = offset + data.nbytes
        self._view[offset:end] = data.tobytes()
        return end

    def _write_point(self, geometry: Point, offset: int) -> int:
        self._coordinate.pack_into(self._view, offset, geometry.x, geometry.y)
        return offset + COORDINATE_SIZE

    def _write_linestring(self, geometry: LineString, offset: int) -> int:
        return self._write_coordinates(geometry.vertices, offset)

    def _write_polygon(self, geometry: Polygon, offset: int) -> int:
        offset = self._write_uint32(geometry.ring_count, offset)
        for ring in geometry.rings:
            offset = self._write_coordinates(ring, offset)

        return offset

    def _write_multipoint(self, geometry: MultiPoint, offset: int) -> int:
        offset = self._write_uint32(len(geometry), offset)
        for coord in geometry:
            offset = self._write_header(WkbIdentifier.POINT, offset)
            self._coordinate.pack_into(self._view, offset, coord.x, coord.y)
            offset += COORDINATE_SIZE

        return offset

    def _write_children(self, geometry, offset: int) -> int:
        offset = self._write_uint32(len(geometry), offset)
        for child in geometry.geoshapes:
            offset = self._write_geometry(child, offset, nested=True)

        return offset


class WkbReader(LoggingMixin):

    """
    Reads geometries from a bytes-like object. Each node's own byte order marker
    is honoured, so mixed-endian input decodes correctly.

    Args:
        buffer:
            Any bytes-like object
    """

    _BODY_READERS = {
        WkbIdentifier.POINT: '_read_point',
        WkbIdentifier.LINESTRING: '_read_linestring',
        WkbIdentifier.POLYGON: '_read_polygon',
        WkbIdentifier.MULTIPOINT: '_read_multipoint',
        WkbIdentifier.MULTILINESTRING: '_read_multilinestring',
        WkbIdentifier.MULTIPOLYGON: '_read_multipolygon',
        WkbIdentifier.GEOMETRYCOLLECTION: '_read_geometrycollection',
    }

    def __init__(self, buffer: BufferLike):
        super().__init__()
        self._view = _byte_view(buffer)
        self._depth = 0

    def read(self, offset: int = 0) -> Tuple[BaseGeometry, int]:
        """
        Decodes one geometry starting at the given offset.

        Args:
            offset:
                The position in the buffer of the geometry's byte order marker

        Returns:
            A 2-tuple of the geometry and the number of bytes consumed
        """
        if offset < 0:
            raise ValueError(f'Offset must be non-negative; received {offset}')

        geometry, end = self._read_geometry(offset, nested=False)
        return geometry, end - offset

    def _require(self, offset: int, size: int, what: str):
        remaining = len(self._view) - offset
        if remaining < size:
            raise TruncatedInputError(
                f'Expected {size} bytes for {what} at offset {offset}; '
                f'only {max(remaining, 0)} remain'
            )

    def _read_header(self, offset: int) -> Tuple[WkbIdentifier, int, str, int]:
        self._require(offset, HEADER_SIZE, 'a geometry header')

        marker = self._view[offset]
        if marker not in _MARKER_PREFIXES:
            raise WkbDecodeError(f'Invalid byte order marker {marker} at offset {offset}')

        prefix = _MARKER_PREFIXES[marker]
        type_word, = struct.unpack_from(f'{prefix}I', self._view, offset + 1)

        tag = type_word & EWKB_TYPE_MASK
        if tag not in _VALID_TAGS:
            raise UnknownTypeTagError(f'Unknown geometry type {tag} at offset {offset}')

        flags = EwkbModifier(type_word & EWKB_FLAG_MASK)
        if flags & (EwkbModifier.HAS_Z | EwkbModifier.HAS_M):
            raise UnsupportedDimensionError(
                f'{WkbIdentifier(tag).name} at offset {offset} declares Z and/or M '
                f'coordinates; only 2D geometries are supported'
            )

        offset += HEADER_SIZE
        srid = 0
        if flags & EwkbModifier.HAS_SRID:
            self._require(offset, SRID_SIZE, 'an SRID')
            srid, = struct.unpack_from(f'{prefix}I', self._view, offset)
            offset += SRID_SIZE

        return WkbIdentifier(tag), srid, prefix, offset

    def _read_geometry(
        self,
        offset: int,
        nested: bool,
        expected: Optional[WkbIdentifier] = None
    ) -> Tuple[BaseGeometry, int]:
        start = offset
        identifier, srid, prefix, offset = self._read_header(offset)
        if expected is not None and identifier != expected:
            raise WkbDecodeError(
                f'Expected a {expected.name} at offset {start}, found {identifier.name}'
            )

        if nested and srid:
            self.logger.debug('Nested %s at offset %d carries SRID %d', identifier.name, start, srid)

        if self._depth >= MAX_NESTING_DEPTH:
            raise WkbDecodeError(
                f'{identifier.name} at offset {start} exceeds the maximum nesting '
                f'depth of {MAX_NESTING_DEPTH}'
            )

        self._depth += 1
        try:
            geometry, offset = getattr(self, self._BODY_READERS[identifier])(offset, prefix)
        finally:
            self._depth -= 1

        geometry.srid = srid
        self.logger.debug('Decoded %s (%d bytes) at offset %d', identifier.name, offset - start, start)
        return geometry, offset

    def _read_uint32(self, offset: int, prefix: str, what: str) -> Tuple[int, int]:
        self._require(offset, UINT32_SIZE, what)
        value, = struct.unpack_from(f'{prefix}I', self._view, offset)
        return value, offset + UINT32_SIZE

    def _read_coordinates(self, offset: int, prefix: str) -> Tuple[Tuple[Coordinate2D, ...], int]:
        """Reads a point count followed by that many flat (x, y) pairs"""
        count, offset = self._read_uint32(offset, prefix, 'a point count')
        if not count:
            return (), offset

        size = count * COORDINATE_SIZE
        self._require(offset, size, f'{count} coordinates')
        data = np.frombuffer(
            self._view, dtype=np.dtype(f'{prefix}f8'), count=count * 2, offset=offset
        ).reshape(count, 2)
        return tuple(Coordinate2D(x, y) for x, y in data.tolist()), offset + size

    def _read_count(self, offset: int, prefix: str, min_item_size: int) -> Tuple[int, int]:
        """Reads an item count, checking enough bytes remain for that many items"""
        count, offset = self._read_uint32(offset, prefix, 'an item count')
        self._require(offset, count * min_item_size, f'{count} items')
        return count, offset

    def _read_point(self, offset: int, prefix: str) -> Tuple[Point, int]:
        self._require(offset, COORDINATE_SIZE, 'a coordinate')
        x, y = struct.unpack_from(f'{prefix}dd', self._view, offset)
        return Point(x, y), offset + COORDINATE_SIZE

    def _read_linestring(self, offset: int, prefix: str) -> Tuple[LineString, int]:
        coords, offset = self._read_coordinates(offset, prefix)
        return LineString(coords), offset

    def _read_polygon(self, offset: int, prefix: str) -> Tuple[Polygon, int]:
        ring_count, offset = self._read_count(offset, prefix, UINT32_SIZE)
        rings = []
        for _ in range(ring_count):
            ring, offset = self._read_coordinates(offset, prefix)
            rings.append(ring)

        return Polygon(rings), offset

    def _read_children(
        self,
        offset: int,
        prefix: str,
        min_item_size: int,
        expected: Optional[WkbIdentifier] = None
    ):
        count, offset = self._read_count(offset, prefix, min_item_size)
        children = []
        for _ in range(count):
            child, offset = self._read_geometry(offset, nested=True, expected=expected)
            children.append(child)

        return children, offset

    def _read_multipoint(self, offset: int, prefix: str) -> Tuple[MultiPoint, int]:
        points, offset = self._read_children(offset, prefix, POINT_SIZE, WkbIdentifier.POINT)
        return MultiPoint(points), offset

    def _read_multilinestring(self, offset: int, prefix: str) -> Tuple[MultiLineString, int]:
        lines, offset = self._read_children(
            offset, prefix, HEADER_SIZE + UINT32_SIZE, WkbIdentifier.LINESTRING
        )
        return MultiLineString(lines), offset

    def _read_multipolygon(self, offset: int, prefix: str) -> Tuple[MultiPolygon, int]:
        polygons, offset = self._read_children(
            offset, prefix, HEADER_SIZE + UINT32_SIZE, WkbIdentifier.POLYGON
        )
        return MultiPolygon(polygons), offset

    def _read_geometrycollection(
        self,
        offset: int,
        prefix: str
    ) -> Tuple[GeometryCollection, int]:
        geometries, offset = self._read_children(offset, prefix, HEADER_SIZE)
        return GeometryCollection(geometries), offset


def encode(
    geometry: BaseGeometry,
    buffer: BufferLike,
    offset: int = 0,
    byteorder: str = DEFAULT_BYTE_ORDER
) -> int:
    """
    Encodes a geometry as (E)WKB into an existing buffer.

    Args:
        geometry:
            Any geometry. Its SRID is written if non-zero.

        buffer:
            A writable bytes-like object with at least geometry.byte_length()
            bytes available from offset

        offset:
            The position in the buffer to start writing at

        byteorder:
            Either 'little' (default) or 'big'

    Returns:
        The number of bytes written
    """
    return WkbWriter(buffer, byteorder).write(geometry, offset)


def decode(buffer: BufferLike, offset: int = 0) -> Tuple[BaseGeometry, int]:
    """
    Decodes an (E)WKB geometry from a buffer.

    Args:
        buffer:
            Any bytes-like object

        offset:
            The position in the buffer the geometry starts at

    Returns:
        A 2-tuple of the geometry and the number of bytes consumed
    """
    return WkbReader(buffer).read(offset)


def dumps(geometry: BaseGeometry, byteorder: str = DEFAULT_BYTE_ORDER) -> bytes:
    """
    Encodes a geometry as (E)WKB.

    Args:
        geometry:
            Any geometry. Its SRID is written if non-zero.

        byteorder:
            Either 'little' (default) or 'big'

    Returns:
        bytes
    """
    buffer = bytearray(geometry.byte_length())
    encode(geometry, buffer, 0, byteorder)
    return bytes(buffer)


def loads(data: BufferLike) -> BaseGeometry:
    """
    Decodes a single (E)WKB geometry occupying a whole bytes-like object.

    Args:
        data:
            Any bytes-like object

    Returns:
        The geometry
    """
    geometry, consumed = decode(data)
    trailing = len(_byte_view(data)) - consumed
    if trailing:
        warn_once(f'Ignored {trailing} trailing byte(s) after the encoded geometry.')

    return geometry
