"""tuplespace CLI - Command line interface for tuplespace."""

from __future__ import annotations

from tuplespace.cli.commands import cli, generate, stats


def main() -> None:
    """Main entry point for the tuplespace CLI."""
    cli()


__all__ = ["cli", "generate", "main", "stats"]
