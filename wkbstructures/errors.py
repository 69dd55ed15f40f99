"""Exceptions raised by wkbstructures"""

__all__ = [
    'BufferTooSmallError', 'IndexOutOfRangeError', 'TruncatedInputError',
    'UnknownTypeTagError', 'UnsupportedDimensionError', 'WkbDecodeError',
    'WkbError',
]


class WkbError(Exception):
    """Base class for all wkbstructures errors"""


class IndexOutOfRangeError(WkbError, IndexError):
    """An element, ring or point index does not exist in the geometry"""


class BufferTooSmallError(WkbError, ValueError):
    """The destination buffer cannot hold the encoded geometry"""


class WkbDecodeError(WkbError, ValueError):
    """The input bytes do not describe a supported geometry"""


class TruncatedInputError(WkbDecodeError):
    """The input ended before the geometry was fully read"""


class UnknownTypeTagError(WkbDecodeError):
    """The type word holds a tag outside of 1-7 once flag bits are removed"""


class UnsupportedDimensionError(WkbDecodeError):
    """The type word declares Z and/or M coordinates"""
