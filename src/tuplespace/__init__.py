"""tuplespace - Combinatorial generation and k-wise covering suites.

Build large combination / permutation spaces lazily and reduce them to
compact subsets in which every pair (or triple, or any chosen position list)
of values still appears at least once.

Example:
    >>> from tuplespace import Combinator, RelationFilter, all_pairs
    >>>
    >>> engine = Combinator().choose_one(True, False).choose_one(1, 2, 3).choose_one("a", "b", "c", "d")
    >>> suite = RelationFilter(engine, all_pairs(3))
    >>> for row in suite:
    ...     print(row)
"""

__version__ = "0.1.0"

from tuplespace.combinatorial import (
    Combinator,
    CoverageStats,
    DrawMode,
    Factor,
    Relation,
    RelationFilter,
    all_k_sets,
    all_pairs,
    all_quads,
    all_quints,
    all_triples,
    measure_coverage,
)
from tuplespace.config import TupleSpaceConfig, load_config
from tuplespace.core import EMPTY, FunctionSupplier, Tuple, TupleSupplier, realize, t
from tuplespace.errors import (
    CapacityExceededError,
    ConfigValidationError,
    ModelError,
    PositionOutOfRangeError,
    RelationError,
    StageConfigurationError,
    TupleSpaceError,
)

__all__ = [
    "__version__",
    # Core
    "EMPTY",
    "FunctionSupplier",
    "Tuple",
    "TupleSupplier",
    "realize",
    "t",
    # Generation
    "Combinator",
    "DrawMode",
    "Factor",
    # Covering
    "CoverageStats",
    "Relation",
    "RelationFilter",
    "all_k_sets",
    "all_pairs",
    "all_quads",
    "all_quints",
    "all_triples",
    "measure_coverage",
    # Configuration
    "TupleSpaceConfig",
    "load_config",
    # Errors
    "CapacityExceededError",
    "ConfigValidationError",
    "ModelError",
    "PositionOutOfRangeError",
    "RelationError",
    "StageConfigurationError",
    "TupleSpaceError",
]
