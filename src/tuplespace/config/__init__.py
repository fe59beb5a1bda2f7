"""Configuration for tuplespace.

Model documents live in :mod:`tuplespace.config.model`, which is imported
on demand because it builds on the combinatorial package.
"""

from tuplespace.config.settings import (
    DEFAULT_SHUFFLE_SEED,
    MAX_MATERIALIZED,
    TupleSpaceConfig,
    load_config,
)

__all__ = [
    "DEFAULT_SHUFFLE_SEED",
    "MAX_MATERIALIZED",
    "TupleSpaceConfig",
    "load_config",
]
