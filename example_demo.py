"""Example demonstrating argnest usage."""

import argparse

from argnest import Command, Commander, Matches


def demo_basic_usage() -> None:
    """Build a two-level command tree and run it against a few argument vectors."""
    print('argnest Demo')
    print('=' * 50)

    def add_env(parser: argparse.ArgumentParser) -> None:
        parser.add_argument('-e', '--env', dest='environment', default='dev', help='Environment name')

    def add_debug(parser: argparse.ArgumentParser) -> None:
        parser.add_argument('-d', '--debug', action='store_true', help='Prints debug information verbosely')

    def run_foo(environment: str, matches: Matches) -> None:
        print(f'   Running foo, env = {environment}, debug = {matches.flag("debug")}')

    def run_bar(environment: str, _matches: Matches) -> None:
        print(f'   Running bar, env = {environment}')

    def nothing(environment: str, _matches: Matches) -> None:
        print(f'   No subcommand matched, env = {environment}')

    commander = (
        Commander()
        .global_options(add_env)
        .args(lambda _parent, matches: matches.value_of('environment'))
        .add_cmd(Command('foo').description('Shows foo').options(add_debug).runner(run_foo))
        .add_cmd(Command('bar').description('Shows bar').runner(run_bar))
        .no_cmd(nothing)
    )

    for argv in (
        ['demo', '-e', 'prod', 'foo', '-d'],
        ['demo', 'bar', '--env', 'staging'],
        ['demo'],
    ):
        print(f'\n$ {" ".join(argv)}')
        outcome = commander.run_with_args(argv)
        print(f'   Outcome: {outcome.status} {outcome.path}')


if __name__ == '__main__':
    demo_basic_usage()
