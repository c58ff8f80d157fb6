"""Basic smoke tests for argnest."""

from argnest import __version__
from argnest.cli.main import build_commander


def test_version_import() -> None:
    """Test that we can import the version."""
    assert __version__ == '0.0.0.dev0'


def test_cli_parser_creation() -> None:
    """Test that the demo parser can be created."""
    parser = build_commander().build_parser()
    assert parser.prog == 'argnest-demo'


def test_cli_help() -> None:
    """Test that help can be generated without errors."""
    help_text = build_commander().build_parser().format_help()
    assert 'argnest-demo' in help_text
    assert 'Demonstrates multi-level subcommands' in help_text
    assert 'Shows foo' in help_text
