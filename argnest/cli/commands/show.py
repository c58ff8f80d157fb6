"""argnest-demo show command group."""

import argparse
import sys
from dataclasses import dataclass
from typing import Any

import yaml

from argnest.command import Command, file_stem
from argnest.commander import Commander
from argnest.matches import Matches


@dataclass(frozen=True)
class ShowContext:
    """Context handed to every show subcommand."""

    environment: str
    output_format: str


def _options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--format',
        dest='output_format',
        choices=('plain', 'yaml'),
        default='plain',
        help='Output format for shown values',
    )


def _derive_context(environment: str, matches: Matches) -> ShowContext:
    return ShowContext(
        environment=environment,
        output_format=matches.value_of('output_format', 'plain'),
    )


def _write(context: ShowContext, data: dict[str, Any]) -> None:
    if context.output_format == 'yaml':
        sys.stdout.write(yaml.safe_dump(data, sort_keys=True, default_flow_style=False))
        return
    for key, value in data.items():
        sys.stdout.write(f'{key} = {value}\n')


def _show_env(context: ShowContext, _matches: Matches) -> None:
    _write(context, {'env': context.environment})


def _show_args(context: ShowContext, matches: Matches) -> None:
    data: dict[str, Any] = {}
    node: Matches | None = matches
    while node is not None:
        data[' '.join(node.path) or node.prog] = node.values
        node = node.parent
    _write(context, data)


def _nothing_to_show(_context: ShowContext, _matches: Matches) -> None:
    sys.stdout.write('Nothing to show, try one of: env, args\n')


def cmd() -> Command:
    """Build the show command group."""
    env = Command('env').description('Shows the active environment').runner(_show_env)
    args = Command('args').description('Shows the values parsed on the way to this command').runner(_show_args)
    return (
        Commander()
        .options(_options)
        .args(_derive_context)
        .add_cmd(env)
        .add_cmd(args)
        .no_cmd(_nothing_to_show)
        .into_cmd(file_stem(__file__))
        .description('Shows things')
    )
