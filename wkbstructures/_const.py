"""
Constants declarations for wkbstructures
"""

from enum import IntEnum, IntFlag


class WkbIdentifier(IntEnum):
    """OGC Simple Features geometry type codes (2D)"""
    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7


class EwkbModifier(IntFlag):
    """PostGIS flag bits stored in the high byte of the type word"""
    HAS_SRID = 0x20000000
    HAS_M = 0x40000000
    HAS_Z = 0x80000000


EWKB_FLAG_MASK = 0xE0000000
EWKB_TYPE_MASK = 0x1FFFFFFF

# Byte order markers
BIG_ENDIAN = 0
LITTLE_ENDIAN = 1
DEFAULT_BYTE_ORDER = 'little'

# Sizes, in bytes
BYTE_ORDER_SIZE = 1
UINT32_SIZE = 4
DOUBLE_SIZE = 8
COORDINATE_SIZE = 2 * DOUBLE_SIZE
HEADER_SIZE = BYTE_ORDER_SIZE + UINT32_SIZE  # byte order + type word
SRID_SIZE = UINT32_SIZE
POINT_SIZE = HEADER_SIZE + COORDINATE_SIZE

MAX_SRID = 0xFFFFFFFF

# Deepest collection nesting accepted when decoding
MAX_NESTING_DEPTH = 64

# Non-zero so that empty sequences don't hash to zero
HASH_SEED = 266370105
