"""argnest-demo foo command."""

import argparse
import sys

from argnest.command import Command, file_stem
from argnest.matches import Matches


def _options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-d',
        '--debug',
        action='store_true',
        help='Prints debug information verbosely',
    )


def _run(environment: str, matches: Matches) -> None:
    debug = matches.value_as('debug', bool, default=False)
    sys.stdout.write(f'Running foo, env = {environment}, debug = {debug}\n')


def cmd() -> Command:
    """Build the foo command."""
    return Command(file_stem(__file__)).description('Shows foo').options(_options).runner(_run)
