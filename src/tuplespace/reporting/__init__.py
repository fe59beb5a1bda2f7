"""Reporters for generated suites."""

from tuplespace.reporting.console import ConsoleReporter

__all__ = ["ConsoleReporter"]
