"""Click commands for the ``tuplespace`` CLI."""

from __future__ import annotations

import csv
import io
import json
import logging
import sys
from pathlib import Path

import click

from tuplespace import __version__
from tuplespace.combinatorial import Combinator, RelationFilter
from tuplespace.config import TupleSpaceConfig, load_config
from tuplespace.config.model import ModelSpec, load_model
from tuplespace.core.tuples import Tuple
from tuplespace.errors import TupleSpaceError
from tuplespace.reporting import ConsoleReporter

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json", "csv")


def setup_logging(level: int) -> None:
    """Configure root logging at the given level."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def _load(
    config_path: Path | None,
    model_file: Path,
    seed: int | None,
    verbose: bool,
) -> tuple[TupleSpaceConfig, ModelSpec]:
    config = load_config(config_path)
    setup_logging(logging.DEBUG if verbose else config.logging_level)
    spec = load_model(model_file)
    if seed is not None:
        spec = spec.model_copy(update={"seed": seed})
    logger.debug(f"Loaded model {model_file} with {len(spec.stages)} stage(s)")
    return config, spec


def _render_json(rows: list[Tuple]) -> str:
    return json.dumps([row.to_list() for row in rows], indent=2, default=str)


def _render_csv(rows: list[Tuple]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(row.to_list())
    return buffer.getvalue()


model_argument = click.argument(
    "model_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (environment variables TUPLESPACE_* take precedence)",
)
strength_option = click.option(
    "--strength",
    "-k",
    type=click.IntRange(min=1),
    default=None,
    help="Filter with all k-wise relations, overriding the model's relations",
)
seed_option = click.option(
    "--seed",
    type=int,
    default=None,
    help="Shuffle seed for the relation filter",
)


@click.group()
@click.version_option(__version__, prog_name="tuplespace")
def cli() -> None:
    """tuplespace - combinatorial generation and k-wise covering suites."""


@cli.command()
@model_argument
@strength_option
@click.option("--no-filter", is_flag=True, help="Emit the exhaustive sequence, ignoring relations")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=0),
    default=None,
    help="Emit at most this many tuples",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="table",
    help="Output format",
)
@seed_option
@config_option
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def generate(
    model_file: Path,
    strength: int | None,
    no_filter: bool,
    limit: int | None,
    output_format: str,
    seed: int | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Generate the tuples described by MODEL_FILE.

    Examples:
        tuplespace generate model.yaml              # model's own relations
        tuplespace generate model.yaml -k 2         # pairwise suite
        tuplespace generate model.yaml --no-filter  # everything
    """
    try:
        config, spec = _load(config_path, model_file, seed, verbose)
        supplier = spec.build(config, strength=strength, filtered=not no_filter)
        rows = []
        for row in supplier.stream():
            if limit is not None and len(rows) >= limit:
                break
            rows.append(row)
    except TupleSpaceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(_render_json(rows))
    elif output_format == "csv":
        click.echo(_render_csv(rows), nl=False)
    else:
        ConsoleReporter().print_rows(rows, title=f"{len(rows)} tuple(s)")


@cli.command()
@model_argument
@strength_option
@seed_option
@config_option
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def stats(
    model_file: Path,
    strength: int | None,
    seed: int | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Compare the exhaustive size of MODEL_FILE with its covering suite.

    Without declared relations or --strength, the configured
    default_strength is used.
    """
    try:
        config, spec = _load(config_path, model_file, seed, verbose)
        engine: Combinator = spec.build_engine(config)
        if strength is None and spec.relations is None:
            strength = config.default_strength
        relations = spec.resolve_relations(engine, strength) or []
        seed_value = config.shuffle_seed if spec.seed is None else spec.seed
        suite = RelationFilter(engine, relations, seed=seed_value, config=config)
        coverage = suite.coverage()
    except TupleSpaceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Exhaustive: {suite.source_size} tuple(s)")
    click.echo(f"Covering suite: {coverage.test_count} tuple(s)")
    ConsoleReporter().print_coverage(coverage)


__all__ = ["cli", "generate", "stats"]
