"""Tests for YAML model documents."""

from __future__ import annotations

import pytest

from tuplespace import Combinator, DrawMode, ModelError, RelationFilter, TupleSpaceConfig, t
from tuplespace.combinatorial.coverage import projection_sets
from tuplespace.config.model import ModelSpec, StrengthSpec, load_model, parse_model

SIMPLE_MODEL = """
stages:
  - choose: 2
    pool: [a, b, c]
  - permute: 2
    pool: [1, 2, 3]
"""

THREE_FACTOR_MODEL = """
stages:
  - choose: 1
    pool: [true, false]
  - choose: 1
    pool: [1, 2, 3]
  - choose: 1
    pool: [a, b, c, d]
relations: pairs
"""


# ============================================================
# Parsing
# ============================================================


class TestParseModel:
    def test_shorthand_stages(self):
        spec = parse_model({"stages": [{"choose": 2, "pool": ["a", "b"]}, {"permute": 3, "pool": [1]}]})
        assert [(s.mode, s.arity) for s in spec.stages] == [
            (DrawMode.COMBINE, 2),
            (DrawMode.PERMUTE, 3),
        ]

    def test_explicit_mode_and_arity(self):
        spec = parse_model({"stages": [{"mode": "permute", "arity": 2, "pool": [1, 2]}]})
        assert spec.stages[0].mode is DrawMode.PERMUTE

    def test_literal_tuple_entries(self):
        spec = parse_model({"stages": [{"choose": 1, "pool": [["x", "y"], [[1, 2], 3]]}]})
        assert spec.stages[0].pool == [t("x", "y"), t((1, 2), 3)]

    def test_nested_model_entries(self):
        spec = parse_model(
            {"stages": [{"choose": 1, "pool": [{"stages": [{"choose": 1, "pool": ["p", "q"]}]}, "r"]}]}
        )
        nested = spec.stages[0].pool[0]
        assert isinstance(nested, ModelSpec)
        assert spec.build().to_list() == [t("p"), t("q"), t("r")]

    @pytest.mark.parametrize(
        "relations,expected",
        [
            ("pairs", "pairs"),
            ({"strength": 3}, StrengthSpec(strength=3)),
            ([[0, 1], [1, 2]], [[0, 1], [1, 2]]),
            (None, None),
        ],
    )
    def test_relation_forms(self, relations, expected):
        spec = parse_model({"stages": [], "relations": relations})
        assert spec.relations == expected

    @pytest.mark.parametrize(
        "document",
        [
            {"stages": [{"choose": 2, "permute": 1, "pool": [1]}]},
            {"stages": [{"choose": 0, "pool": [1]}]},
            {"stages": [{"choose": 1, "mode": "combine", "pool": [1]}]},
            {"stages": [{"mode": "shuffle", "arity": 1}]},
            {"stages": [], "colour": "blue"},
            {"stages": [], "relations": "pentagons"},
            {"stages": [], "relations": {"strength": 0}},
        ],
    )
    def test_invalid_documents(self, document):
        with pytest.raises(ModelError) as exc_info:
            parse_model(document)
        assert exc_info.value.message.startswith("Invalid model at")

    def test_not_a_mapping(self):
        with pytest.raises(ModelError):
            parse_model(["stages"])


class TestLoadModel:
    def test_load(self, write_yaml):
        spec = load_model(write_yaml(SIMPLE_MODEL))
        assert len(spec.stages) == 2
        assert spec.stages[0].pool == ["a", "b", "c"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelError, match="not found"):
            load_model(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, write_yaml):
        with pytest.raises(ModelError, match="not valid YAML"):
            load_model(write_yaml("stages: [\n"))

    def test_empty_file(self, write_yaml):
        with pytest.raises(ModelError):
            load_model(write_yaml(""))


# ============================================================
# Building
# ============================================================


class TestBuild:
    def test_unfiltered_model_builds_engine(self, write_yaml):
        supplier = load_model(write_yaml(SIMPLE_MODEL)).build()
        assert isinstance(supplier, Combinator)
        rows = supplier.to_list()
        assert len(rows) == 18
        assert rows[0] == t("a", "b", 1, 2)

    def test_named_relations(self, write_yaml):
        supplier = load_model(write_yaml(THREE_FACTOR_MODEL)).build()
        assert isinstance(supplier, RelationFilter)
        assert supplier.relations == (t(0, 1), t(0, 2), t(1, 2))
        rows = supplier.to_list()
        assert [len(s) for s in projection_sets(rows, supplier.relations)] == [6, 8, 12]

    def test_filtered_false(self, write_yaml):
        supplier = load_model(write_yaml(THREE_FACTOR_MODEL)).build(filtered=False)
        assert isinstance(supplier, Combinator)
        assert supplier.size() == 24

    def test_strength_override(self, write_yaml):
        spec = load_model(write_yaml(SIMPLE_MODEL))
        supplier = spec.build(strength=2)
        assert isinstance(supplier, RelationFilter)
        assert len(supplier.relations) == 6

    def test_strength_spec_with_width(self):
        spec = parse_model(
            {
                "stages": [{"choose": 1, "pool": [0, 1]}] * 4,
                "relations": {"strength": 2, "width": 3},
            }
        )
        assert len(spec.build().relations) == 3

    def test_explicit_relations(self):
        spec = parse_model(
            {"stages": [{"choose": 1, "pool": [0, 1]}] * 3, "relations": [[0, 2]]}
        )
        assert spec.build().relations == (t(0, 2),)

    def test_seed(self, write_yaml):
        spec = load_model(write_yaml(THREE_FACTOR_MODEL + "seed: 7\n"))
        assert spec.build().seed == 7

    def test_config_seed_used_without_model_seed(self, write_yaml):
        spec = load_model(write_yaml(THREE_FACTOR_MODEL))
        assert spec.build(TupleSpaceConfig(shuffle_seed=5)).seed == 5

    def test_nested_filter(self):
        spec = parse_model(
            {
                "stages": [
                    {
                        "choose": 1,
                        "pool": [
                            {
                                "stages": [{"choose": 1, "pool": [0, 1]}] * 3,
                                "relations": "pairs",
                            }
                        ],
                    },
                    {"choose": 1, "pool": ["x", "y"]},
                ]
            }
        )
        engine = spec.build()
        bits = Combinator().choose_one(0, 1).choose_one(0, 1).choose_one(0, 1)
        inner = RelationFilter(bits, [[0, 1], [0, 2], [1, 2]])
        assert engine.size() == 2 * len(inner.to_list())
        assert engine.width() == 4
