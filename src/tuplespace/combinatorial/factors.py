"""Selection stages ("factors") for the combination engine.

A :class:`Factor` is one combination or permutation draw of ``arity``
candidates from a pool. The pool is flattened lazily into candidates:

- a literal value becomes one single-element candidate;
- a :class:`~tuplespace.core.tuples.Tuple` is one candidate carrying all of
  its elements;
- a :class:`~tuplespace.core.protocol.TupleSupplier` contributes one
  candidate per tuple it produces, and is re-invoked each time the
  candidates are needed.

All counting operates on the flattened candidates, not on the declared pool
entries. Drawing more candidates than exist yields nothing rather than
raising.

Example:
    >>> factor = Factor(DrawMode.COMBINE, 2, ("a", "b", "c"))
    >>> [str(d) for d in factor.draws()]
    ['[a, b]', '[a, c]', '[b, c]']
    >>> factor.size()
    3
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Any

from tuplespace.core.protocol import TupleSupplier
from tuplespace.core.tuples import Tuple
from tuplespace.errors import ErrorContext, StageConfigurationError


class DrawMode(Enum):
    """How a stage selects its candidates."""

    COMBINE = "combine"   # unordered, each subset once
    PERMUTE = "permute"   # ordered, no repeated candidate


def candidate_of(entry: Any) -> Iterator[Tuple]:
    """Expand a single pool entry into its candidates."""
    if isinstance(entry, Tuple):
        yield entry
    elif isinstance(entry, TupleSupplier):
        yield from entry.stream()
    else:
        yield Tuple((entry,))


def check_arity(arity: Any) -> int:
    """Validate a stage arity, returning it unchanged."""
    if isinstance(arity, bool) or not isinstance(arity, int):
        raise StageConfigurationError(
            f"Stage arity must be an integer, got {arity!r}",
            context=ErrorContext(extra={"arity": repr(arity)}),
        )
    if arity < 1:
        raise StageConfigurationError(
            f"Stage arity must be at least 1, got {arity}",
            context=ErrorContext(extra={"arity": arity}),
        )
    return arity


def check_entry(entry: Any) -> Any:
    """Reject pool literals that cannot be hashed, returning ``entry`` unchanged."""
    if isinstance(entry, TupleSupplier):
        return entry
    try:
        hash(entry)
    except TypeError as e:
        raise StageConfigurationError(
            f"Pool values must be hashable, got {type(entry).__name__}: {entry!r}",
            context=ErrorContext(extra={"entry": repr(entry)}),
        ) from e
    return entry


@dataclass(frozen=True)
class Factor:
    """One combination or permutation draw.

    Attributes:
        mode: Whether draws are unordered (combine) or ordered (permute).
        arity: Number of candidates per draw.
        pool: Declared pool entries, in order.
    """

    mode: DrawMode
    arity: int
    pool: tuple[Any, ...]

    def __post_init__(self) -> None:
        check_arity(self.arity)
        if not isinstance(self.pool, tuple):
            object.__setattr__(self, "pool", tuple(self.pool))
        for entry in self.pool:
            check_entry(entry)

    def candidates(self) -> Iterator[Tuple]:
        """Lazily flatten the pool into candidates, in pool order."""
        for entry in self.pool:
            yield from candidate_of(entry)

    def candidate_count(self) -> int:
        """Count the flattened candidates (drains nested suppliers once)."""
        return sum(1 for _ in self.candidates())

    def draws(self) -> Iterator[Tuple]:
        """Yield every draw of this stage as one concatenated tuple."""
        if self.arity == 1 or self.mode is DrawMode.COMBINE:
            return self._combine(self.arity, 0)
        return self._permute(self.arity, frozenset())

    def _combine(self, remaining: int, skip: int) -> Iterator[Tuple]:
        # Positions before `skip` were consumed by shallower levels.
        positioned = enumerate(islice(self.candidates(), skip, None), start=skip)
        for position, candidate in positioned:
            if remaining == 1:
                yield candidate
                continue
            for rest in self._combine(remaining - 1, position + 1):
                yield candidate + rest

    def _permute(self, remaining: int, forbidden: frozenset[int]) -> Iterator[Tuple]:
        for position, candidate in enumerate(self.candidates()):
            if position in forbidden:
                continue
            if remaining == 1:
                yield candidate
                continue
            for rest in self._permute(remaining - 1, forbidden | {position}):
                yield candidate + rest

    def size(self) -> int:
        """Exact number of draws this stage produces."""
        n = self.candidate_count()
        if self.arity > n:
            return 0
        if self.arity == 1 or self.mode is DrawMode.COMBINE:
            return math.comb(n, self.arity)
        return math.perm(n, self.arity)

    def __repr__(self) -> str:
        return f"Factor({self.mode.value}, arity={self.arity}, pool={list(self.pool)!r})"


__all__ = ["DrawMode", "Factor", "candidate_of", "check_arity", "check_entry"]
