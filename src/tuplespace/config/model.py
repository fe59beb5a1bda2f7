"""Declarative model documents.

A model document describes an engine (and optionally a relation filter on
top of it) in YAML, so suites can be generated without writing Python::

    stages:
      - choose: 2
        pool: [a, b, c]
      - permute: 2
        pool: [1, 2, 3]
      - choose: 1
        pool:
          - [x, y]              # literal tuple: one candidate, two values
          - stages:             # nested engine
              - choose: 1
                pool: [p, q]
    relations: pairs            # or triples / quads / quints,
                                # {strength: 2, width: 5},
                                # or [[0, 1], [2, 3]]
    seed: 52

Example:
    >>> spec = load_model("model.yaml")
    >>> supplier = spec.build()
    >>> rows = supplier.to_list()
"""

from __future__ import annotations

from collections.abc import Hashable
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from tuplespace.combinatorial import Combinator, DrawMode, RelationFilter, all_k_sets
from tuplespace.config.settings import TupleSpaceConfig
from tuplespace.core.protocol import SupplierMixin
from tuplespace.core.tuples import Tuple
from tuplespace.errors import ErrorContext, ModelError

_NAMED_STRENGTHS = {"pairs": 2, "triples": 3, "quads": 4, "quints": 5}

_SHORTHAND_MODES = {"choose": DrawMode.COMBINE, "permute": DrawMode.PERMUTE}


def _freeze(value: Any) -> Hashable:
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        raise ValueError("mappings are not allowed inside a literal tuple")
    return value


class StrengthSpec(BaseModel):
    """All ``strength``-wise relations over tuples of ``width`` positions."""

    model_config = ConfigDict(extra="forbid")

    strength: int = Field(ge=1)
    width: int | None = Field(default=None, ge=0)


class StageSpec(BaseModel):
    """One selection stage: ``{choose: r, pool: [...]}`` or ``{permute: r, pool: [...]}``."""

    model_config = ConfigDict(extra="forbid")

    mode: DrawMode
    arity: int = Field(ge=1)
    pool: list[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def expand_shorthand(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        present = [key for key in _SHORTHAND_MODES if key in data]
        if not present:
            return data
        if len(present) > 1 or "mode" in data or "arity" in data:
            raise ValueError("a stage takes exactly one of 'choose', 'permute' or 'mode'/'arity'")
        data = dict(data)
        key = present[0]
        data["mode"] = _SHORTHAND_MODES[key]
        data["arity"] = data.pop(key)
        return data

    @field_validator("pool", mode="after")
    @classmethod
    def convert_entries(cls, v: list[Any]) -> list[Any]:
        entries: list[Any] = []
        for entry in v:
            if isinstance(entry, dict):
                entries.append(ModelSpec.model_validate(entry))
            elif isinstance(entry, list):
                entries.append(Tuple(tuple(_freeze(x) for x in entry)))
            else:
                entries.append(entry)
        return entries

    def pool_entries(self, config: TupleSpaceConfig | None = None) -> list[Any]:
        """Pool entries ready for a :class:`Combinator`, nested models built."""
        return [
            entry.build(config) if isinstance(entry, ModelSpec) else entry
            for entry in self.pool
        ]


class ModelSpec(BaseModel):
    """An engine, optionally wrapped in a relation filter."""

    model_config = ConfigDict(extra="forbid")

    stages: list[StageSpec] = Field(default_factory=list)
    relations: Literal["pairs", "triples", "quads", "quints"] | StrengthSpec | list[list[int]] | None = None
    seed: int | None = None

    def build_engine(self, config: TupleSpaceConfig | None = None) -> Combinator:
        """Build the engine described by ``stages``."""
        engine = Combinator()
        for stage in self.stages:
            pool = stage.pool_entries(config)
            if stage.mode is DrawMode.COMBINE:
                engine.add_combination(stage.arity, pool)
            else:
                engine.add_permutation(stage.arity, pool)
        return engine

    def resolve_relations(self, engine: Combinator, strength: int | None = None) -> list[Tuple] | None:
        """Relations to filter with, or ``None`` when the model is unfiltered.

        ``strength`` overrides whatever the document declares.
        """
        if strength is not None:
            return all_k_sets(engine.width() or 0, strength)
        if self.relations is None:
            return None
        if isinstance(self.relations, str):
            return all_k_sets(engine.width() or 0, _NAMED_STRENGTHS[self.relations])
        if isinstance(self.relations, StrengthSpec):
            width = self.relations.width
            if width is None:
                width = engine.width() or 0
            return all_k_sets(width, self.relations.strength)
        return [Tuple(tuple(r)) for r in self.relations]

    def build(
        self,
        config: TupleSpaceConfig | None = None,
        strength: int | None = None,
        filtered: bool = True,
    ) -> SupplierMixin:
        """Build the supplier described by this model.

        Args:
            config: Settings passed on to relation filters.
            strength: Filter with all ``strength``-wise relations instead of
                the declared ones.
            filtered: When False, return the bare engine.
        """
        engine = self.build_engine(config)
        if not filtered:
            return engine
        relations = self.resolve_relations(engine, strength)
        if relations is None:
            return engine
        return RelationFilter(engine, relations, seed=self.seed, config=config)


def parse_model(data: Any) -> ModelSpec:
    """Validate an already-parsed document."""
    if not isinstance(data, dict):
        raise ModelError(
            "A model document must be a mapping with a 'stages' list",
            context=ErrorContext(extra={"type": type(data).__name__}),
        )
    try:
        return ModelSpec.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(p) for p in first["loc"])
        raise ModelError(
            f"Invalid model at '{location}': {first['msg']}",
            context=ErrorContext(extra={"errors": e.error_count(), "location": location}),
        ) from e


def load_model(path: str | Path) -> ModelSpec:
    """Load and validate a YAML model document.

    Raises:
        ModelError: If the file is missing, is not valid YAML, or does not
            describe a model.
    """
    path = Path(path)
    if not path.exists():
        raise ModelError(
            f"Model file not found: {path}",
            context=ErrorContext(extra={"path": str(path)}),
        )
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ModelError(
            f"Model file is not valid YAML: {path}: {e}",
            context=ErrorContext(extra={"path": str(path)}),
        ) from e
    return parse_model(data)


__all__ = ["ModelSpec", "StageSpec", "StrengthSpec", "load_model", "parse_model"]
