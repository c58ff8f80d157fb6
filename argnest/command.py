"""Single commands and how they are registered and run."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from argnest.errors import ArgnestError, ConfigurationError, RunnerError
from argnest.logging import get_logger
from argnest.matches import Matches
from argnest.models import Outcome
from argnest.parser import Customizer, NestedSubParsersAction, global_template

if TYPE_CHECKING:
    from argnest.commander import Commander

logger = get_logger(__name__)

Handler = Callable[[Any, Matches], Any]


def file_stem(path: str | Path) -> str:
    """Return the stem of a source file, for naming a command after its module."""
    return Path(path).stem


def invoke(handler: Handler, context: Any, matches: Matches) -> Any:
    """Call a runner or fallback, wrapping foreign exceptions in RunnerError."""
    try:
        return handler(context, matches)
    except ArgnestError:
        raise
    except Exception as exc:
        logger.debug(
            'runner_failed',
            path=list(matches.path),
            error=str(exc),
            _verbose_error_type=type(exc).__name__,
        )
        raise RunnerError(str(exc), path=matches.path) from exc


class Command:
    """A named unit of work inside a Commander.

    A command is either a leaf that owns a runner, or a branch that hands its
    sub-parser and dispatch over to an embedded Commander (see
    ``Commander.into_cmd``).
    """

    def __init__(self, name: str) -> None:
        if not name or not name.strip():
            msg = 'Command name cannot be empty'
            raise ConfigurationError(msg)
        self.name = name
        self.desc: str | None = None
        self.opts: Customizer | None = None
        self.handler: Handler | None = None
        self.alias_names: tuple[str, ...] = ()
        self.commander: Commander | None = None

    @classmethod
    def branch(cls, name: str, commander: Commander) -> Command:
        cmd = cls(name)
        cmd.commander = commander
        return cmd

    @property
    def is_branch(self) -> bool:
        return self.commander is not None

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.alias_names)

    def description(self, desc: str) -> Command:
        self.desc = desc
        return self

    def options(self, opts: Customizer) -> Command:
        self.opts = opts
        return self

    def runner(self, run: Handler) -> Command:
        if self.is_branch:
            msg = f'Command {self.name!r} delegates to a commander and cannot have a runner'
            raise ConfigurationError(msg)
        self.handler = run
        return self

    def aliases(self, *aliases: str) -> Command:
        if any(not alias or not alias.strip() for alias in aliases):
            msg = f'Aliases of {self.name!r} cannot be empty'
            raise ConfigurationError(msg)
        self.alias_names = aliases
        return self

    def register(
        self,
        subparsers: NestedSubParsersAction,
        inherited: tuple[Customizer, ...] = (),
    ) -> None:
        """Add this command's sub-parser to ``subparsers``."""
        parser = subparsers.add_parser(
            self.name,
            aliases=list(self.alias_names),
            help=self.desc,
            description=self.desc,
            parents=[global_template(customizer) for customizer in inherited],
        )
        for alias in self.alias_names:
            subparsers.canonical_names[alias] = self.name

        if self.opts is not None:
            self.opts(parser)

        if self.commander is not None:
            self.commander.populate(parser, inherited)

    def dispatch(self, context: Any, matches: Matches, no_match_message: str | None = None) -> Outcome:
        if self.commander is not None:
            return self.commander.dispatch(context, matches, no_match_message)

        if self.handler is None:
            msg = f'Command {" ".join(matches.path)!r} has no runner'
            raise ConfigurationError(msg)

        logger.debug('invoking_runner', path=list(matches.path))
        value = invoke(self.handler, context, matches)
        return Outcome(status='completed', path=matches.path, value=value)
