"""Combinatorial generation and covering-subset selection.

Two pieces work together:

- :class:`Combinator` composes combination / permutation stages, nested as
  deep as needed, into one lazy tuple sequence.
- :class:`RelationFilter` reduces any tuple sequence to a subset that still
  exhibits every distinct projection of the given relations (pairwise,
  3-wise, or arbitrary position lists).

Example:
    >>> from tuplespace.combinatorial import Combinator, RelationFilter, all_pairs
    >>>
    >>> engine = (
    ...     Combinator()
    ...     .choose_one("anon", "user", "admin")
    ...     .choose_one("active", "archived")
    ...     .choose_one(0, 1, "many")
    ... )
    >>> suite = RelationFilter(engine, all_pairs(3))
    >>> print(f"Pairwise: {len(suite.to_list())} tests (vs {engine.size()} exhaustive)")
"""

from tuplespace.combinatorial.combinator import Combinator
from tuplespace.combinatorial.coverage import (
    CoverageStats,
    measure_coverage,
    projection_sets,
    uncovered_projections,
)
from tuplespace.combinatorial.factors import DrawMode, Factor
from tuplespace.combinatorial.relations import (
    Relation,
    RelationFilter,
    all_k_sets,
    all_pairs,
    all_quads,
    all_quints,
    all_triples,
)

__all__ = [
    "Combinator",
    "CoverageStats",
    "DrawMode",
    "Factor",
    "Relation",
    "RelationFilter",
    "all_k_sets",
    "all_pairs",
    "all_quads",
    "all_quints",
    "all_triples",
    "measure_coverage",
    "projection_sets",
    "uncovered_projections",
]
