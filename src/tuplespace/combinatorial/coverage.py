"""Coverage measurement for relation-filtered tuple sets.

For every relation, the *projections* of a set of rows are the distinct
sub-tuples found at the relation's positions. A selection covers its source
when, for every relation, it exhibits every projection the source does.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from tuplespace.core.tuples import Tuple


@dataclass
class CoverageStats:
    """Statistics about how well a selection covers its source.

    Attributes:
        strength: Widest relation measured (0 when there are none).
        relation_count: Number of relations measured.
        total_projections: Distinct projections across the source, summed
            over all relations.
        covered_projections: How many of those the selection exhibits.
        coverage_pct: Percentage coverage (0-100).
        test_count: Number of selected rows.
        source_count: Number of source rows.
    """

    strength: int
    relation_count: int
    total_projections: int
    covered_projections: int
    coverage_pct: float
    test_count: int
    source_count: int

    @property
    def reduction_pct(self) -> float:
        """Share of the source that the selection dropped (0-100)."""
        if self.source_count == 0:
            return 0.0
        return (1 - self.test_count / self.source_count) * 100

    @property
    def is_complete(self) -> bool:
        return self.covered_projections == self.total_projections

    def __repr__(self) -> str:
        return (
            f"CoverageStats(t={self.strength}, "
            f"{self.covered_projections}/{self.total_projections} projections covered "
            f"({self.coverage_pct:.1f}%), "
            f"{self.test_count}/{self.source_count} tests)"
        )


def projection_sets(rows: Iterable[Tuple], relations: Sequence[Tuple]) -> list[set[Tuple]]:
    """Collect, per relation, the distinct projections of ``rows``."""
    sets: list[set[Tuple]] = [set() for _ in relations]
    for row in rows:
        for i, relation in enumerate(relations):
            sets[i].add(row.project(relation))
    return sets


def uncovered_projections(
    source_rows: Sequence[Tuple],
    selected_rows: Sequence[Tuple],
    relations: Sequence[Tuple],
) -> dict[Tuple, set[Tuple]]:
    """Projections present in the source but missing from the selection.

    Returns:
        Mapping of relation to its missing projections. Relations with
        nothing missing are omitted, so a full cover yields ``{}``.
    """
    wanted = projection_sets(source_rows, relations)
    seen = projection_sets(selected_rows, relations)
    missing: dict[Tuple, set[Tuple]] = {}
    for relation, source_set, selected_set in zip(relations, wanted, seen, strict=True):
        gap = source_set - selected_set
        if gap:
            missing.setdefault(relation, set()).update(gap)
    return missing


def measure_coverage(
    source_rows: Sequence[Tuple],
    selected_rows: Sequence[Tuple],
    relations: Sequence[Tuple],
) -> CoverageStats:
    """Compute coverage statistics of ``selected_rows`` against ``source_rows``."""
    wanted = projection_sets(source_rows, relations)
    seen = projection_sets(selected_rows, relations)

    total = sum(len(s) for s in wanted)
    covered = sum(len(w & s) for w, s in zip(wanted, seen, strict=True))
    pct = (covered / total * 100) if total > 0 else 100.0

    return CoverageStats(
        strength=max((len(r) for r in relations), default=0),
        relation_count=len(relations),
        total_projections=total,
        covered_projections=covered,
        coverage_pct=pct,
        test_count=len(selected_rows),
        source_count=len(source_rows),
    )


__all__ = ["CoverageStats", "measure_coverage", "projection_sets", "uncovered_projections"]
