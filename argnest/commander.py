"""Commander: a runnable group of commands, nestable to any depth."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from argnest.command import Command, Handler, invoke
from argnest.config import AppSettings
from argnest.errors import ArgnestError, ConfigurationError, ParseError
from argnest.logging import get_logger
from argnest.matches import Matches
from argnest.models import Outcome
from argnest.parser import CommandParser, Customizer, option_actions

logger = get_logger(__name__)

ContextFn = Callable[[Any, Matches], Any]


def _forward(parent: Any, _matches: Matches) -> Any:
    return parent


class Commander:
    """Define a group of commands to be run directly, or converted as a
    whole into a branch command of another Commander.

    Example:
        Commander()
            .global_options(add_env_flag)
            .args(lambda _parent, matches: matches.value_of('environment', 'dev'))
            .add_cmd(foo)
            .add_cmd(bar)
            .run()
    """

    def __init__(self) -> None:
        self.opts: Customizer | None = None
        self.global_opts: list[Customizer] = []
        self.context_fn: ContextFn = _forward
        self.commands: dict[str, Command] = {}
        self.fallback: Handler | None = None
        self.app_settings = AppSettings()
        self._taken: dict[str, str] = {}

    def options(self, opts: Customizer) -> Commander:
        self.opts = opts
        return self

    def global_options(self, opts: Customizer) -> Commander:
        """Declare options accepted by this node and every node below it."""
        self.global_opts.append(opts)
        return self

    def args(self, context_fn: ContextFn) -> Commander:
        """Set how this node derives its context from the parent context and
        its own matches."""
        self.context_fn = context_fn
        return self

    def add_cmd(self, cmd: Command) -> Commander:
        for name in cmd.names:
            if name in self._taken:
                msg = f'Command name {name!r} is already registered by {self._taken[name]!r}'
                raise ConfigurationError(msg)
        for name in cmd.names:
            self._taken[name] = cmd.name
        self.commands[cmd.name] = cmd
        return self

    def no_cmd(self, no_cmd: Handler) -> Commander:
        self.fallback = no_cmd
        return self

    def settings(self, settings: AppSettings) -> Commander:
        self.app_settings = settings
        return self

    def prog(self, prog: str) -> Commander:
        self.app_settings = self.app_settings.model_copy(update={'prog': prog})
        return self

    def about(self, description: str) -> Commander:
        self.app_settings = self.app_settings.model_copy(update={'description': description})
        return self

    def version(self, version: str) -> Commander:
        self.app_settings = self.app_settings.model_copy(update={'version': version})
        return self

    def into_cmd(self, name: str) -> Command:
        """Convert this Commander into a branch command named ``name``."""
        return Command.branch(name, self)

    def populate(
        self,
        parser: CommandParser,
        inherited: tuple[Customizer, ...] = (),
    ) -> None:
        """Declare this node's options and register its children on ``parser``."""
        if self.opts is not None:
            self.opts(parser)
        first_global = len(parser._actions)
        for customizer in self.global_opts:
            customizer(parser)

        if not self.commands:
            return

        parser.defer_required(parser._actions[first_global:])
        visible = (*inherited, *self.global_opts)
        subparsers = parser.add_command_subparsers(title='commands')
        subparsers.global_actions = option_actions(visible)
        for cmd in self.commands.values():
            cmd.register(subparsers, visible)

    def build_parser(self, prog: str | None = None) -> CommandParser:
        """Build the complete nested parser for this command tree."""
        settings = self.app_settings
        parser = CommandParser(
            prog=settings.prog or prog,
            description=settings.description,
            epilog=settings.epilog,
        )
        try:
            if settings.version:
                parser.add_argument('--version', action='version', version=settings.version)
            self.populate(parser)
        except argparse.ArgumentError as exc:
            msg = f'Invalid command schema: {exc}'
            raise ConfigurationError(msg) from exc

        logger.debug('built_parser', prog=parser.prog, commands=list(self.commands))
        return parser

    def dispatch(
        self,
        parent_context: Any,
        matches: Matches,
        no_match_message: str | None = None,
    ) -> Outcome:
        """Walk down from this node and run exactly one handler."""
        no_match_message = no_match_message or self.app_settings.no_match_message
        context = self.context_fn(parent_context, matches)

        name, child = matches.subcommand
        if child is not None:
            logger.debug('dispatching_command', command=name, path=list(child.path))
            return self.commands[name].dispatch(context, child, no_match_message)

        if self.fallback is not None:
            logger.debug('invoking_fallback', path=list(matches.path), unmatched=list(matches.unmatched))
            value = invoke(self.fallback, context, matches)
            return Outcome(
                status='fallback',
                path=matches.path,
                value=value,
                unmatched=matches.unmatched,
            )

        logger.debug('no_subcommand_matched', path=list(matches.path), unmatched=list(matches.unmatched))
        headline = no_match_message
        if matches.unmatched:
            headline = f'{headline}: {matches.unmatched[0]}'
        return Outcome(
            status='no_match',
            path=matches.path,
            message=f'{headline}\n\n{matches.help_text()}',
            unmatched=matches.unmatched,
        )

    def run(self, context: Any = None) -> Outcome:
        """Parse ``sys.argv`` and dispatch."""
        return self.run_with_args(sys.argv, context=context)

    def run_with_args(self, args: Iterable[str], context: Any = None) -> Outcome:
        """Parse ``args`` and dispatch.

        ``args[0]`` is the program name; it becomes the parser's prog unless
        one was configured.
        """
        args = [str(arg) for arg in args]
        prog = Path(args[0]).name if args else None
        parser = self.build_parser(prog)
        namespace = parser.parse_args(args[1:])
        matches = Matches(namespace, parser=parser)
        node: Matches | None = matches
        while node is not None:
            if isinstance(node.parser, CommandParser):
                node.parser.check_deferred(node.namespace)
            node = node.child
        logger.debug('parsed_arguments', prog=parser.prog, _verbose_values=matches.values)
        return self.dispatch(context, matches)

    def main(self, argv: Iterable[str] | None = None, context: Any = None) -> int:
        """Run the tree and map the result to a process exit code."""
        try:
            outcome = self.run_with_args(sys.argv if argv is None else argv, context=context)
        except ParseError as exc:
            sys.stderr.write(exc.render(with_help=self.app_settings.help_on_error))
            return 2
        except ArgnestError as exc:
            logger.debug('command_failed', error=str(exc), error_type=type(exc).__name__)
            sys.stderr.write(f'Error: {exc}\n')
            return 1

        if outcome.message:
            sys.stdout.write(outcome.message)
        return 0
