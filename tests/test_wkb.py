import math
import struct

import pytest

from wkbstructures import *
from wkbstructures.utils.mixins import LoggingMixin
from wkbstructures.wkb import WkbReader, WkbWriter
from tests.functions import assert_wkb_roundtrip


SQUARE = [(0., 0.), (1., 0.), (1., 1.), (0., 1.), (0., 0.)]
HOLE = [(0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.25)]


@pytest.mark.parametrize('geometry', [
    Point(1.5, -2.25),
    LineString([(0., 0.), (1., 1.), (2., 0.)], srid=4326),
    LineString([]),
    Polygon([SQUARE, HOLE], srid=3857),
    MultiPoint([(0., 0.), (-1., 2.5)]),
    MultiLineString([[(0., 0.), (1., 1.)], [(2., 2.), (3., 3.), (4., 4.)]]),
    MultiPolygon([[SQUARE], [SQUARE, HOLE]], srid=4326),
    GeometryCollection([]),
    GeometryCollection(
        [
            Point(1., 2.),
            MultiPoint([(3., 4.)]),
            GeometryCollection([LineString([(0., 0.)]), Polygon([])]),
        ],
        srid=4269
    ),
])
@pytest.mark.parametrize('byteorder', ['little', 'big'])
def test_roundtrip(geometry, byteorder):
    assert_wkb_roundtrip(geometry, byteorder)


def test_encode_point():
    assert dumps(Point(1.5, -2.25)) == (
        b'\x01' + b'\x01\x00\x00\x00' + struct.pack('<dd', 1.5, -2.25)
    )
    assert Point(1.5, -2.25).to_hex() == '0101000000000000000000F83F00000000000002C0'

    assert dumps(Point(1.5, -2.25), byteorder='big') == (
        b'\x00' + b'\x00\x00\x00\x01' + struct.pack('>dd', 1.5, -2.25)
    )


def test_encode_srid():
    data = dumps(Point(0., 0., srid=4326))
    assert len(data) == 9 + 16
    assert struct.unpack('<I', data[1:5])[0] == 0x20000001
    assert data[5:9] == b'\xE6\x10\x00\x00'
    assert data.hex().upper() == '0101000020E6100000' + '0' * 32

    data = dumps(Point(0., 0., srid=4326), byteorder='big')
    assert data[:9] == b'\x00\x20\x00\x00\x01\x00\x00\x10\xE6'

    point = loads(data)
    assert point.srid == 4326


def test_encode_linestring():
    data = dumps(LineString([(0., 0.), (1., 1.)]))
    assert data == (
        b'\x01\x02\x00\x00\x00' + b'\x02\x00\x00\x00' + struct.pack('<4d', 0., 0., 1., 1.)
    )


def test_encode_polygon():
    data = dumps(Polygon([[(0., 0.), (1., 0.), (0., 0.)], []]))
    assert data == (
        b'\x01\x03\x00\x00\x00'
        + struct.pack('<I', 2)
        + struct.pack('<I', 3) + struct.pack('<6d', 0., 0., 1., 0., 0., 0.)
        + struct.pack('<I', 0)
    )


def test_encode_multipoint():
    data = dumps(MultiPoint([(1., 2.), (3., 4.)], srid=4326))
    assert data == (
        b'\x01' + struct.pack('<II', 0x20000004, 4326) + struct.pack('<I', 2)
        + b'\x01' + struct.pack('<I', 1) + struct.pack('<dd', 1., 2.)
        + b'\x01' + struct.pack('<I', 1) + struct.pack('<dd', 3., 4.)
    )
    assert len(data) == 13 + 2 * 21


def test_encode_nested_srid_dropped(caplog):
    LoggingMixin.WARNED_ONCE.clear()
    gc = GeometryCollection([Point(1., 2., srid=3857)], srid=4326)
    data = dumps(gc)
    assert len(data) == gc.byte_length() == 13 + 21

    # The nested point is plain WKB, no SRID flag
    assert data[13:18] == b'\x01\x01\x00\x00\x00'
    assert 'SRIDs of nested geometries are not encoded' in caplog.text

    decoded = loads(data)
    assert decoded.srid == 4326
    assert decoded[0].srid == 0


def test_encode_offset():
    line = LineString([(0., 0.), (1., 1.)])
    buffer = bytearray(b'\xff' * 3 + bytes(line.byte_length()) + b'\xff')
    assert encode(line, buffer, offset=3) == 41
    assert buffer[:3] == b'\xff\xff\xff'
    assert buffer[-1:] == b'\xff'
    assert buffer[3:44] == dumps(line)

    geometry, consumed = decode(buffer, offset=3)
    assert geometry == line
    assert consumed == 41

    # Writable memoryviews are accepted too
    view = memoryview(bytearray(41))
    assert encode(line, view) == 41
    assert bytes(view) == dumps(line)


def test_encode_buffer_too_small():
    line = LineString([(0., 0.), (1., 1.)])
    with pytest.raises(BufferTooSmallError):
        encode(line, bytearray(40))

    with pytest.raises(BufferTooSmallError):
        encode(line, bytearray(41), offset=1)

    with pytest.raises(BufferTooSmallError):
        encode(line, bytearray(41), offset=50)


def test_encode_invalid_args():
    with pytest.raises(TypeError):
        encode(Point(0., 0.), bytes(21))

    with pytest.raises(ValueError):
        encode(Point(0., 0.), bytearray(21), byteorder='middle')

    with pytest.raises(ValueError):
        encode(Point(0., 0.), bytearray(21), offset=-1)

    with pytest.raises(TypeError):
        encode('POINT(0 0)', bytearray(21))


def test_encode_non_finite():
    point = loads(dumps(Point(float('nan'), float('inf'))))
    assert math.isnan(point.x)
    assert point.y == float('inf')


def test_decode_mixed_endian():
    # Little endian multipoint holding a big endian point
    data = (
        b'\x01' + struct.pack('<II', 4, 2)
        + b'\x00' + struct.pack('>I', 1) + struct.pack('>dd', 1., 2.)
        + b'\x01' + struct.pack('<I', 1) + struct.pack('<dd', 3., 4.)
    )
    geometry, consumed = decode(data)
    assert geometry == MultiPoint([(1., 2.), (3., 4.)])
    assert consumed == len(data) == geometry.byte_length()


def test_decode_nested_srid():
    data = (
        b'\x01' + struct.pack('<II', 7, 1)
        + b'\x01' + struct.pack('<II', 0x20000001, 4326) + struct.pack('<dd', 1., 2.)
    )
    geometry, consumed = decode(data)
    assert geometry == GeometryCollection([Point(1., 2.)])
    assert geometry.srid == 0
    assert geometry[0].srid == 4326
    assert consumed == len(data) == 34


def test_decode_empty_collection():
    geometry, consumed = decode(dumps(GeometryCollection([])))
    assert geometry == GeometryCollection([])
    assert len(geometry) == 0
    assert consumed == 9


def test_decode_nesting_depth():
    def nested_collections(depth):
        return (
            (b'\x01' + struct.pack('<II', 7, 1)) * (depth - 1)
            + b'\x01' + struct.pack('<II', 7, 0)
        )

    geometry, consumed = decode(nested_collections(64))
    assert consumed == 64 * 9
    for _ in range(63):
        geometry = geometry[0]
    assert geometry == GeometryCollection([])

    with pytest.raises(WkbDecodeError) as exc:
        decode(nested_collections(65))
    assert 'maximum nesting depth of 64' in str(exc.value)

    # Far deeper than the interpreter's recursion limit
    with pytest.raises(WkbDecodeError):
        decode(nested_collections(5000))

    # The depth count is released after a failed read
    reader = WkbReader(nested_collections(65) + nested_collections(2))
    with pytest.raises(WkbDecodeError):
        reader.read()
    geometry, _ = reader.read(65 * 9)
    assert geometry == GeometryCollection([GeometryCollection([])])


def test_decode_nan_equality():
    line = LineString([(float('nan'), 0.)])
    assert line != line.copy()
    assert line != loads(dumps(line))
    assert LineString([(1., 0.)]) == loads(dumps(LineString([(1., 0.)])))


def test_decode_unknown_type():
    with pytest.raises(UnknownTypeTagError):
        decode(b'\x01' + struct.pack('<I', 0) + bytes(16))

    with pytest.raises(UnknownTypeTagError):
        decode(b'\x01' + struct.pack('<I', 8) + bytes(16))

    # ISO-style Z point
    with pytest.raises(UnknownTypeTagError):
        decode(b'\x01' + struct.pack('<I', 1001) + bytes(24))

    # Nested
    with pytest.raises(UnknownTypeTagError):
        decode(b'\x01' + struct.pack('<II', 7, 1) + b'\x01' + struct.pack('<I', 9))


def test_decode_unsupported_dimensions():
    with pytest.raises(UnsupportedDimensionError):
        decode(b'\x01' + struct.pack('<I', 0x80000001) + bytes(24))

    with pytest.raises(UnsupportedDimensionError):
        decode(b'\x01' + struct.pack('<I', 0x40000002) + struct.pack('<I', 0))


def test_decode_truncated():
    data = dumps(Point(1., 2.))
    with pytest.raises(TruncatedInputError):
        decode(data[:-1])

    with pytest.raises(TruncatedInputError):
        decode(data[:3])

    with pytest.raises(TruncatedInputError):
        decode(b'')

    with pytest.raises(TruncatedInputError):
        decode(data, offset=len(data))

    # SRID flagged but missing
    with pytest.raises(TruncatedInputError):
        decode(b'\x01' + struct.pack('<I', 0x20000001) + b'\xE6\x10')

    # Declared point count exceeds the data
    with pytest.raises(TruncatedInputError):
        decode(b'\x01' + struct.pack('<II', 2, 5) + struct.pack('<4d', 0., 0., 1., 1.))

    # Declared child count exceeds the data
    with pytest.raises(TruncatedInputError):
        decode(b'\x01' + struct.pack('<II', 4, 1000) + dumps(Point(0., 0.)))

    with pytest.raises(TruncatedInputError):
        decode(dumps(Polygon([SQUARE]))[:-8])

    # Still a ValueError for callers who catch that
    with pytest.raises(ValueError):
        decode(data[:-1])


def test_decode_invalid_byte_order():
    with pytest.raises(WkbDecodeError):
        decode(b'\x02' + struct.pack('<I', 1) + bytes(16))


def test_decode_unexpected_member():
    # A multipoint containing a linestring
    data = b'\x01' + struct.pack('<II', 4, 1) + dumps(LineString([(0., 0.), (1., 1.)]))
    with pytest.raises(WkbDecodeError):
        decode(data)

    # A multipolygon containing a point
    data = b'\x01' + struct.pack('<II', 6, 1) + dumps(Point(0., 0.)) + bytes(16)
    with pytest.raises(WkbDecodeError):
        decode(data)


def test_decode_invalid_offset():
    with pytest.raises(ValueError):
        decode(dumps(Point(0., 0.)), offset=-1)


def test_loads_trailing_bytes(caplog):
    from wkbstructures.utils import logging as wkb_logging

    wkb_logging._WARNINGS.clear()
    assert loads(dumps(Point(1., 2.)) + b'\x00\x00') == Point(1., 2.)
    assert 'Ignored 2 trailing byte(s)' in caplog.text


def test_reader_writer_reuse():
    a, b = Point(1., 2.), LineString([(0., 0.), (1., 1.)])
    buffer = bytearray(a.byte_length() + b.byte_length())

    writer = WkbWriter(buffer, byteorder='big')
    offset = writer.write(a)
    offset += writer.write(b, offset)
    assert offset == len(buffer)

    reader = WkbReader(bytes(buffer))
    first, consumed = reader.read()
    second, _ = reader.read(consumed)
    assert (first, second) == (a, b)


def test_hex():
    gc = GeometryCollection([Point(1., 2.)], srid=4326)
    assert GeometryCollection.from_hex(gc.to_hex()) == gc
    assert GeometryCollection.from_hex(gc.to_hex().lower()).srid == 4326
    assert gc.to_hex('big').startswith('0020000007000010E6')
