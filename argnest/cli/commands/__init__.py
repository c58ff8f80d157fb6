"""Command registrations for the argnest-demo CLI."""

from argnest.commander import Commander

from . import bar, foo, show


def register_all(commander: Commander) -> None:
    """Register all demo commands."""
    commander.add_cmd(foo.cmd())
    commander.add_cmd(bar.cmd())
    commander.add_cmd(show.cmd())
