"""Relation covering filter.

:class:`RelationFilter` reduces a tuple sequence to a subset in which every
distinct sub-tuple named by a *relation* (a list of positions) still appears
at least once. With all pairs of positions as relations this is a pairwise
test suite; with all triples, a 3-wise suite; any mix of relations works.

How it works:

1. The constructor drains the source into a list and shuffles it with a
   fixed seed (52 unless configured otherwise).
2. Each traversal walks the shuffled list once. For every tuple and every
   relation, the tuple's projection is added to that relation's witness set.
   A tuple is kept when at least one projection was new.

Witness sets are updated for every examined tuple, kept or not, so the first
tuple (in shuffled order) showing a given projection is always kept. That is
the whole covering guarantee; no global optimization happens, and results
are typically 1.5-5x larger than a minimal covering array.

Usage warnings:

- The source is fully materialized at construction.
- At most ``max_materialized`` (2**31 - 1 by default) tuples are accepted.
- Relations are not deduplicated or optimized; every relation keeps its own
  witness set, so wide tuples with many values use a lot of memory.

Example:
    >>> from tuplespace import Combinator, RelationFilter, all_pairs
    >>> engine = Combinator().permute_one(True, False).permute_one(1, 2, 3).permute_one("a", "b", "c", "d")
    >>> suite = RelationFilter(engine, all_pairs(3))
    >>> suite.coverage().is_complete
    True
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from tuplespace.combinatorial.combinator import Combinator
from tuplespace.combinatorial.coverage import CoverageStats, measure_coverage
from tuplespace.config.settings import DEFAULT_SHUFFLE_SEED, MAX_MATERIALIZED, TupleSpaceConfig
from tuplespace.core.protocol import SupplierMixin, TupleSupplier
from tuplespace.core.tuples import Tuple
from tuplespace.errors import CapacityExceededError, ErrorContext, PositionOutOfRangeError, RelationError

logger = logging.getLogger(__name__)

# A relation is a tuple of non-negative positions.
Relation = Tuple


class RelationFilter(SupplierMixin):
    """Streams a covering subset of a source sequence.

    Args:
        supplier: Source of the tuples to be filtered.
        *relations: Each argument is either one relation (a sequence of
            ints or a ``Tuple``) or a collection, iterator or supplier of
            relations, which is flattened.
        seed: Shuffle seed. Defaults to ``config.shuffle_seed``, or 52
            without a config.
        config: Settings to use. The environment is never read here;
            pass the result of :func:`~tuplespace.config.load_config` to
            apply it.

    Raises:
        CapacityExceededError: If the source holds more than
            ``config.max_materialized`` tuples.
        RelationError: If a relation contains anything but integers.
    """

    def __init__(
        self,
        supplier: TupleSupplier,
        *relations: Any,
        seed: int | None = None,
        config: TupleSpaceConfig | None = None,
    ) -> None:
        default_seed = DEFAULT_SHUFFLE_SEED if config is None else config.shuffle_seed
        limit = MAX_MATERIALIZED if config is None else config.max_materialized
        self._seed = default_seed if seed is None else seed
        self._relations = tuple(_flatten_relations(relations))
        self._data = _materialize(supplier, limit)
        random.Random(self._seed).shuffle(self._data)

        logger.info(
            f"Materialized {len(self._data)} tuples for {len(self._relations)} "
            f"relation(s) (seed={self._seed})"
        )

    @property
    def relations(self) -> tuple[Relation, ...]:
        return self._relations

    @property
    def source_size(self) -> int:
        """Number of tuples materialized from the source."""
        return len(self._data)

    @property
    def seed(self) -> int:
        return self._seed

    def stream(self) -> Iterator[Tuple]:
        """Lazily yield the retained tuples, in shuffled order.

        Every call starts with empty witness sets.
        """
        return self._traverse()

    def _traverse(self) -> Iterator[Tuple]:
        witnesses: list[set[Tuple]] = [set() for _ in self._relations]
        retained = 0
        for row in self._data:
            if self._accept(row, witnesses):
                retained += 1
                yield row
        logger.debug(f"Traversal kept {retained} of {len(self._data)} tuples")

    def _accept(self, row: Tuple, witnesses: list[set[Tuple]]) -> bool:
        novel = False
        # Every witness set must see the row, so no early exit.
        for relation, seen in zip(self._relations, witnesses, strict=True):
            projection = _project(row, relation)
            if projection not in seen:
                seen.add(projection)
                novel = True
        return novel

    def coverage(self) -> CoverageStats:
        """Measure how well this filter's output covers its source."""
        return measure_coverage(self._data, self.to_list(), self._relations)

    def __repr__(self) -> str:
        return (
            f"RelationFilter(source={len(self._data)}, "
            f"relations={len(self._relations)}, seed={self._seed})"
        )


def _materialize(supplier: TupleSupplier, limit: int) -> list[Tuple]:
    data: list[Tuple] = []
    for row in supplier.stream():
        if len(data) >= limit:
            raise CapacityExceededError(limit)
        data.append(row)
    return data


def _project(row: Tuple, relation: Relation) -> Tuple:
    try:
        return row.project(relation)
    except PositionOutOfRangeError as e:
        raise PositionOutOfRangeError(e.position, e.arity, relation) from e


def _is_position(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_relation(value: Any) -> Relation:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise RelationError(
            f"A relation must be a sequence of positions, got {value!r}",
            context=ErrorContext(extra={"relation": repr(value)}),
        )
    positions = tuple(value)
    bad = [p for p in positions if not _is_position(p)]
    if bad:
        raise RelationError(
            f"Relation positions must be integers, got {bad!r} in {positions!r}",
            context=ErrorContext(extra={"relation": repr(positions)}),
        )
    return Tuple(positions)


def _flatten_relations(arguments: Sequence[Any]) -> Iterator[Relation]:
    """Expand relation arguments into individual relations, in order."""
    for argument in arguments:
        if isinstance(argument, Tuple):
            yield _as_relation(argument)
        elif isinstance(argument, TupleSupplier):
            for relation in argument.stream():
                yield _as_relation(relation)
        elif isinstance(argument, (str, bytes)) or not isinstance(argument, Iterable):
            yield _as_relation(argument)
        else:
            items = list(argument)
            if all(_is_position(item) for item in items):
                # A bare list of ints is a single relation.
                if items:
                    yield Tuple(tuple(items))
            else:
                for item in items:
                    yield _as_relation(item)


def all_k_sets(n: int, k: int) -> list[Relation]:
    """Every ascending ``k``-element subset of positions ``0..n-1``.

    Args:
        n: Width of the tuples the relations apply to.
        k: Interaction strength.
    """
    return Combinator().choose_r(k, *range(n)).to_list()


def all_pairs(n: int) -> list[Relation]:
    """All pairwise relations for tuples of width ``n``."""
    return all_k_sets(n, 2)


def all_triples(n: int) -> list[Relation]:
    """All triplet-wise relations for tuples of width ``n``."""
    return all_k_sets(n, 3)


def all_quads(n: int) -> list[Relation]:
    """All quartet-wise relations for tuples of width ``n``."""
    return all_k_sets(n, 4)


def all_quints(n: int) -> list[Relation]:
    """All quintet-wise relations for tuples of width ``n``."""
    return all_k_sets(n, 5)


__all__ = [
    "Relation",
    "RelationFilter",
    "all_k_sets",
    "all_pairs",
    "all_quads",
    "all_quints",
    "all_triples",
]
