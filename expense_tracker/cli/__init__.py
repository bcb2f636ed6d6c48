"""Command-line interface package."""

from expense_tracker.cli.app import COMMANDS, main, run
from expense_tracker.cli.parser import ParsedArgs, parse_argv

__all__ = ["COMMANDS", "ParsedArgs", "main", "parse_argv", "run"]
