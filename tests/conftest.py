"""Pytest fixtures for tuplespace tests."""

from __future__ import annotations

import os
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from tuplespace import Combinator, TupleSpaceConfig, t


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep TUPLESPACE_* variables and stray .env files out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("TUPLESPACE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config() -> TupleSpaceConfig:
    return TupleSpaceConfig()


@pytest.fixture
def simple_engine() -> Combinator:
    """combine(2, {a,b,c}) followed by permute(2, {1,2,3})."""
    return Combinator().choose_two("a", "b", "c").permute_two(1, 2, 3)


@pytest.fixture
def three_factor_engine() -> Combinator:
    """booleans x {1,2,3} x {a,b,c,d}: 24 tuples of width 3."""
    return (
        Combinator()
        .permute_one(True, False)
        .permute_one(1, 2, 3)
        .permute_one("a", "b", "c", "d")
    )


@pytest.fixture
def nested_engine() -> Combinator:
    """Two nested blocks of three flags plus one trailing flag (width 7)."""

    def flags() -> Combinator:
        return Combinator().choose_one(False).choose_one(True, False).choose_one(True, False)

    return (
        Combinator()
        .choose_one(t(True, False, False), flags())
        .choose_one(t(True, False, False), flags())
        .choose_one(True, False)
    )


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a dedented YAML document into tmp_path and return its path."""

    def _write(text: str, name: str = "model.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write
