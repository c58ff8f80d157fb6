"""Main CLI entry point for argnest-demo."""

import argparse
import sys
from collections.abc import Sequence

from argnest import __version__
from argnest.cli.commands import register_all
from argnest.commander import Commander
from argnest.logging import configure_logging
from argnest.matches import Matches


def _global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-e',
        '--env',
        dest='environment',
        metavar='STRING',
        default='dev',
        help='Sets an environment value, defaults to "dev"',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Enable verbose logging',
    )


def _derive_environment(_parent: object, matches: Matches) -> str:
    configure_logging(verbose=matches.flag('verbose'))
    return matches.value_of('environment', 'dev')


def build_commander() -> Commander:
    """Build the demo command tree."""
    commander = (
        Commander()
        .prog('argnest-demo')
        .about('Demonstrates multi-level subcommands built with argnest')
        .version(f'%(prog)s {__version__}')
        .global_options(_global_options)
        .args(_derive_environment)
    )
    register_all(commander)
    return commander


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the argnest-demo CLI."""
    return build_commander().main(argv)


if __name__ == '__main__':
    sys.exit(main())
