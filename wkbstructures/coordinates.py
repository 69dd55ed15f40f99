"""
Representation of a planar (x, y) coordinate
"""

__all__ = ['Coordinate2D', 'CoordinateLike']

from typing import Iterator, Sequence, Tuple, Union

from wkbstructures.utils.functions import hash_32, rotate_left_32


class Coordinate2D:
    """
    An immutable pair of double precision floats (x, y).

    Equality is exact; no tolerance is applied, and NaN/Infinity values are
    stored as given.
    """

    __slots__ = ('_x', '_y')

    def __init__(
        self,
        x: Union[float, int, str],
        y: Union[float, int, str],
    ):
        object.__setattr__(self, '_x', float(x))
        object.__setattr__(self, '_y', float(y))

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, Coordinate2D):
            return False

        return self._x == other._x and self._y == other._y

    def __hash__(self):
        return hash_32(self._x) ^ rotate_left_32(hash_32(self._y), 2)

    def __iter__(self) -> Iterator[float]:
        return iter((self._x, self._y))

    def __repr__(self):
        return f'<Coordinate2D({self._x}, {self._y})>'

    def __reduce__(self):
        return self.__class__, (self._x, self._y)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @classmethod
    def from_value(cls, value: 'CoordinateLike') -> 'Coordinate2D':
        """
        Returns a Coordinate2D from either an existing Coordinate2D or an
        (x, y) pair.

        Args:
            value:
                A Coordinate2D, or a two-element sequence of numbers

        Returns:
            Coordinate2D
        """
        if isinstance(value, Coordinate2D):
            return value

        if value is None or isinstance(value, (str, bytes)):
            raise TypeError(f'Cannot interpret {value!r} as a coordinate')

        x, y = value
        return cls(x, y)

    def to_float(self) -> Tuple[float, float]:
        """The coordinate as an (x, y) tuple of floats"""
        return self._x, self._y

    def to_str(self) -> Tuple[str, str]:
        """The coordinate as an (x, y) tuple of strings"""
        return str(self._x), str(self._y)


CoordinateLike = Union[Coordinate2D, Sequence[float]]
