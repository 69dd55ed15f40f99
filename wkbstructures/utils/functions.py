"""Module for miscellaneous multi-use functions"""

__all__ = [
    'combine_hashes', 'get_item', 'hash_32', 'rotate_left_32',
]

from typing import Iterable, Sequence, TypeVar

from wkbstructures._const import HASH_SEED
from wkbstructures.errors import IndexOutOfRangeError

_MASK_32 = 0xFFFFFFFF

T = TypeVar('T')


def hash_32(obj) -> int:
    """Python's hash of an object, folded to an unsigned 32-bit word"""
    return hash(obj) & _MASK_32


def rotate_left_32(value: int, shift: int) -> int:
    """
    Rotates the bits of an unsigned 32-bit word to the left.

    Args:
        value:
            The word to rotate. Bits above the 32nd are discarded.

        shift:
            The number of bit positions to rotate by, modulo 32

    Returns:
        int
    """
    value &= _MASK_32
    shift %= 32
    return ((value << shift) | (value >> (32 - shift))) & _MASK_32


def combine_hashes(hashes: Iterable[int]) -> int:
    """
    Folds a sequence of hashes into a single order-sensitive hash.

    Each hash is rotated left by (accumulator % 32) bits and XOR'd into the
    accumulator, which starts from a fixed non-zero seed.

    Args:
        hashes:
            An iterable of hashes, in order

    Returns:
        int
    """
    acc = HASH_SEED
    for _hash in hashes:
        acc ^= rotate_left_32(_hash, acc % 32)

    return acc


def get_item(sequence: Sequence[T], index: int, label: str = 'element') -> T:
    """
    Indexes into a sequence, raising IndexOutOfRangeError (rather than a bare
    IndexError) with a description of what was being looked up.

    Args:
        sequence:
            The sequence to index into

        index:
            The position of the item

        label:
            A name for the kind of item, used in the error message

    Returns:
        The item at the index
    """
    try:
        return sequence[index]
    except IndexError as exc:
        raise IndexOutOfRangeError(
            f'{label.capitalize()} index {index} out of range for length {len(sequence)}'
        ) from exc
