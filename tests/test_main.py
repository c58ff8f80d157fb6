"""Tests for Commander.main exit code handling."""

import argparse

import pytest

from argnest.command import Command
from argnest.commander import Commander
from argnest.config import AppSettings
from argnest.matches import Matches


def _commander() -> Commander:
    def add_debug(parser: argparse.ArgumentParser) -> None:
        parser.add_argument('-d', '--debug', action='store_true')

    def run_foo(_context: object, matches: Matches) -> None:
        print(f'foo debug={matches.flag("debug")}')

    def run_fail(_context: object, _matches: Matches) -> None:
        msg = 'boom'
        raise RuntimeError(msg)

    return (
        Commander()
        .add_cmd(Command('foo').description('Shows foo').options(add_debug).runner(run_foo))
        .add_cmd(Command('fail').runner(run_fail))
        .add_cmd(Command('empty'))
    )


class TestMain:
    """Tests for mapping outcomes and errors to exit codes."""

    def test_success(self, capsys: pytest.CaptureFixture) -> None:
        """Test that a successful runner exits with 0."""
        assert _commander().main(['prog', 'foo', '-d']) == 0
        assert capsys.readouterr().out == 'foo debug=True\n'

    def test_no_match_is_success(self, capsys: pytest.CaptureFixture) -> None:
        """Test that the no-match outcome prints help and exits with 0."""
        assert _commander().main(['prog', 'baz']) == 0

        out = capsys.readouterr().out
        assert out.startswith('No subcommand matched: baz\n')
        assert 'usage: prog' in out

    def test_parse_error_prints_help(self, capsys: pytest.CaptureFixture) -> None:
        """Test that parse errors exit with 2 and show the subcommand help."""
        assert _commander().main(['prog', 'foo', '--bogus']) == 2

        err = capsys.readouterr().err
        assert 'prog foo: error: unrecognized arguments: --bogus' in err
        assert 'Shows foo' in err

    def test_parse_error_without_help(self, capsys: pytest.CaptureFixture) -> None:
        """Test that help on error can be switched off."""
        commander = _commander().settings(AppSettings(help_on_error=False))

        assert commander.main(['prog', 'foo', '--bogus']) == 2

        err = capsys.readouterr().err
        assert err.startswith('usage: prog foo')
        assert 'Shows foo' not in err

    def test_runner_error(self, capsys: pytest.CaptureFixture) -> None:
        """Test that runner failures exit with 1 and print the message."""
        assert _commander().main(['prog', 'fail']) == 1
        assert 'Error: boom\n' in capsys.readouterr().err

    def test_configuration_error(self, capsys: pytest.CaptureFixture) -> None:
        """Test that a missing runner exits with 1."""
        assert _commander().main(['prog', 'empty']) == 1
        assert "Error: Command 'empty' has no runner" in capsys.readouterr().err
