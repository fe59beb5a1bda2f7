"""The immutable tuple value produced by every generator.

A :class:`Tuple` is an ordered vector of hashable values. Equality and
hashing are element-wise and order sensitive, so tuples can be used directly
as members of witness sets. Elements are compared as tagged values: both the
type and the value must match, so ``t(True)`` and ``t(1)`` are distinct.
A float NaN is equal to any other NaN.

Inside an engine pool a ``Tuple`` also acts as a *literal tuple*: one
candidate that contributes all of its elements at once.

Example:
    >>> from tuplespace import t
    >>> row = t("a", "b", 1, 2)
    >>> str(row)
    '[a, b, 1, 2]'
    >>> row.project([0, 3])
    Tuple('a', 2)
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload

from tuplespace.errors import PositionOutOfRangeError


@dataclass(frozen=True, eq=False)
class Tuple:
    """An immutable, hashable, ordered group of values.

    Attributes:
        values: The elements, in order.
    """

    values: tuple[Hashable, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        if len(self.values) != len(other.values):
            return False
        return all(_same(a, b) for a, b in zip(self.values, other.values))

    def __hash__(self) -> int:
        return hash(tuple((type(v), _hash_key(v)) for v in self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.values)

    @overload
    def __getitem__(self, index: int) -> Hashable: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple: ...

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return Tuple(self.values[index])
        return self.values[index]

    def __add__(self, other: object) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.concat(other)

    def concat(self, other: Tuple) -> Tuple:
        """Return a new tuple holding this tuple's values followed by ``other``'s."""
        return Tuple(self.values + other.values)

    def project(self, positions: Iterable[int]) -> Tuple:
        """Return the sub-tuple found at ``positions``, in the given order.

        Raises:
            PositionOutOfRangeError: If a position is negative or not smaller
                than this tuple's arity.
        """
        arity = len(self.values)
        picked = []
        for position in positions:
            if position < 0 or position >= arity:
                raise PositionOutOfRangeError(position, arity)
            picked.append(self.values[position])
        return Tuple(tuple(picked))

    def to_list(self) -> list[Any]:
        """Convert to a plain list."""
        return list(self.values)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.values) + "]"

    def __repr__(self) -> str:
        return "Tuple(" + ", ".join(repr(v) for v in self.values) + ")"


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _same(a: Any, b: Any) -> bool:
    # NaN equals itself here, so NaN projections deduplicate.
    if type(a) is not type(b):
        return False
    return a is b or a == b or (_is_nan(a) and _is_nan(b))


def _hash_key(value: Any) -> Any:
    return "nan" if _is_nan(value) else value


def t(*values: Hashable) -> Tuple:
    """Build a :class:`Tuple` from positional values."""
    return Tuple(values)


def as_tuple(values: Tuple | Sequence[Hashable]) -> Tuple:
    """Coerce a sequence (or an existing tuple) to a :class:`Tuple`."""
    if isinstance(values, Tuple):
        return values
    return Tuple(tuple(values))


EMPTY = Tuple(())


__all__ = ["EMPTY", "Tuple", "as_tuple", "t"]
