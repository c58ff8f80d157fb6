"""argnest-demo bar command."""

import sys

from argnest.command import Command, file_stem
from argnest.matches import Matches


def _run(environment: str, _matches: Matches) -> None:
    sys.stdout.write(f'Running bar, env = {environment}\n')


def cmd() -> Command:
    """Build the bar command."""
    return Command(file_stem(__file__)).description('Shows bar').aliases('b').runner(_run)
