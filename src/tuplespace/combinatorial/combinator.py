"""Combination / permutation engine.

A :class:`Combinator` holds an ordered list of selection stages and composes
them into one lazy sequence of tuples. Each produced tuple is the
concatenation, in declaration order, of one draw from every stage; outer
(earlier) stages vary slowest.

Builder calls mutate the engine in place and return it, so they chain::

    >>> from tuplespace import Combinator, t
    >>> engine = Combinator().choose_two("a", "b", "c").permute_two(1, 2, 3)
    >>> [str(row) for row in engine.stream()][:3]
    ['[a, b, 1, 2]', '[a, b, 1, 3]', '[a, b, 2, 1]']
    >>> engine.size()
    18

Pools may mix literal values, literal tuples (``t(...)``) and nested
suppliers, including other engines and relation filters::

    >>> nested = Combinator().permute_three(t("!", "*"), Combinator().choose_two("x", "y", "z"))
    >>> str(next(iter(nested)))
    '[!, *, x, y, x, z]'

Generation is lazy and restartable: every ``stream()`` call walks the stages
again from scratch, regenerating each stage's candidates for every prefix.
Nothing is validated against the candidate count up front; a stage asking
for more candidates than it has simply produces no tuples.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import Any

from tuplespace.combinatorial.factors import DrawMode, Factor
from tuplespace.core.protocol import SupplierMixin
from tuplespace.core.tuples import EMPTY, Tuple

logger = logging.getLogger(__name__)


class Combinator(SupplierMixin):
    """Composes combination and permutation stages into one tuple sequence.

    Attributes:
        factors: The declared stages, in order (read-only view).

    Example:
        >>> Combinator().choose_one(True, False).choose_one(1, 2, 3).size()
        6
    """

    def __init__(self) -> None:
        self._factors: list[Factor] = []

    # ------------------------------------------------------------------
    # Builder API
    # ------------------------------------------------------------------

    def add_combination(self, arity: int, pool: Iterable[Any]) -> Combinator:
        """Append a combination stage drawing ``arity`` candidates from ``pool``.

        Multiplies the number of results by C(N, arity), where N is the
        flattened candidate count.
        """
        self._factors.append(Factor(DrawMode.COMBINE, arity, tuple(pool)))
        return self

    def add_permutation(self, arity: int, pool: Iterable[Any]) -> Combinator:
        """Append a permutation stage selecting ``arity`` candidates from ``pool``.

        Multiplies the number of results by N!/(N-arity)!, where N is the
        flattened candidate count.
        """
        self._factors.append(Factor(DrawMode.PERMUTE, arity, tuple(pool)))
        return self

    def choose(self, arity: int, *pool: Any) -> Combinator:
        return self.add_combination(arity, pool)

    def permute(self, arity: int, *pool: Any) -> Combinator:
        return self.add_permutation(arity, pool)

    def choose_one(self, *pool: Any) -> Combinator:
        """Choose one candidate from the pool."""
        return self.add_combination(1, pool)

    def choose_two(self, *pool: Any) -> Combinator:
        """Choose two candidates; reorderings of an earlier pick are skipped."""
        return self.add_combination(2, pool)

    def choose_three(self, *pool: Any) -> Combinator:
        return self.add_combination(3, pool)

    def choose_four(self, *pool: Any) -> Combinator:
        return self.add_combination(4, pool)

    def choose_five(self, *pool: Any) -> Combinator:
        return self.add_combination(5, pool)

    def choose_r(self, r: int, *pool: Any) -> Combinator:
        """Choose ``r`` candidates from the pool."""
        return self.add_combination(r, pool)

    def permute_one(self, *pool: Any) -> Combinator:
        """Select one candidate; identical to :meth:`choose_one`."""
        return self.choose_one(*pool)

    def permute_two(self, *pool: Any) -> Combinator:
        """Select two candidates in every order, without repetition."""
        return self.add_permutation(2, pool)

    def permute_three(self, *pool: Any) -> Combinator:
        return self.add_permutation(3, pool)

    def permute_four(self, *pool: Any) -> Combinator:
        return self.add_permutation(4, pool)

    def permute_five(self, *pool: Any) -> Combinator:
        return self.add_permutation(5, pool)

    def permute_n(self, r: int, *pool: Any) -> Combinator:
        """Select ``r`` candidates in every order, without repetition."""
        return self.add_permutation(r, pool)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    @property
    def factors(self) -> tuple[Factor, ...]:
        return tuple(self._factors)

    def stream(self) -> Iterator[Tuple]:
        """Lazily yield every tuple dictated by the declared stages.

        Returns:
            A fresh iterator; calling again restarts generation.
        """
        factors = tuple(self._factors)
        logger.debug(f"Starting generation over {len(factors)} stage(s)")
        return self._expand(factors, 0, EMPTY)

    def generate(self) -> Iterator[Tuple]:
        """Alias of :meth:`stream`."""
        return self.stream()

    def _expand(self, factors: tuple[Factor, ...], index: int, prefix: Tuple) -> Iterator[Tuple]:
        if index == len(factors):
            yield prefix
            return
        for draw in factors[index].draws():
            yield from self._expand(factors, index + 1, prefix + draw)

    def size(self) -> int:
        """Exact number of tuples :meth:`stream` produces.

        Nested suppliers are drained to count their candidates.
        """
        return math.prod(factor.size() for factor in self._factors)

    def width(self) -> int | None:
        """Arity of the produced tuples, or ``None`` if nothing is produced."""
        first = next(self.stream(), None)
        return None if first is None else len(first)

    def __repr__(self) -> str:
        stages = ", ".join(
            f"{f.mode.value}{f.arity}" for f in self._factors
        )
        return f"Combinator([{stages}])"


__all__ = ["Combinator"]
