"""argparse glue that keeps each sub-parser's results nested."""

import argparse
from collections.abc import Callable, Iterable
from typing import Any, NoReturn

from argnest.errors import ParseError

Customizer = Callable[[argparse.ArgumentParser], object]

COMMAND_DEST = '_argnest_command'
SUBMATCH_ATTR = '_argnest_submatch'
UNMATCHED_ATTR = '_argnest_unmatched'
INTERNAL_ATTRS = frozenset({COMMAND_DEST, SUBMATCH_ATTR, UNMATCHED_ATTR})


def merge_global_value(action: argparse.Action, earlier: Any, later: Any) -> Any:
    """Combine a global option value given at two levels of the tree.

    Counts add up and appended lists are concatenated. For every other
    action the value typed deeper in the tree wins.
    """
    if earlier is None:
        return later
    if isinstance(action, argparse._CountAction):
        return earlier + later
    if isinstance(action, (argparse._AppendAction, argparse._AppendConstAction)):
        return [*earlier, *later]
    return later


class NestedSubParsersAction(argparse._SubParsersAction):
    """Sub-parsers action that stores the selected sub-parser's namespace
    under the parent namespace instead of merging the two.

    Global option values found in the sub-namespace are copied up so the
    parent sees values given after the subcommand name.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.canonical_names: dict[str, str] = {}
        self.global_actions: dict[str, argparse.Action] = {}

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        name, *arg_strings = values
        subparser = self._name_parser_map.get(name)
        if subparser is None:
            # Unknown names are not errors: the node falls back to no_cmd.
            setattr(namespace, self.dest, None)
            setattr(namespace, UNMATCHED_ATTR, list(values))
            return

        subnamespace, extras = subparser.parse_known_args(arg_strings, None)
        if extras:
            subparser.error(f'unrecognized arguments: {" ".join(extras)}')

        for dest in vars(subnamespace).keys() & self.global_actions.keys():
            value = merge_global_value(
                self.global_actions[dest],
                getattr(namespace, dest, None),
                getattr(subnamespace, dest),
            )
            setattr(namespace, dest, value)
        setattr(namespace, self.dest, self.canonical_names.get(name, name))
        setattr(namespace, SUBMATCH_ATTR, subnamespace)


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises ParseError instead of exiting."""

    command_action: NestedSubParsersAction | None = None
    # Required global options whose check waits until the whole tree is parsed.
    deferred_required: tuple[argparse.Action, ...] = ()

    def error(self, message: str) -> NoReturn:
        raise ParseError(
            message,
            prog=self.prog,
            usage=self.format_usage(),
            help_text=self.format_help(),
        )

    def _check_value(self, action: argparse.Action, value: object) -> None:
        if isinstance(action, NestedSubParsersAction) and value not in action.choices:
            return
        super()._check_value(action, value)

    def add_command_subparsers(self, **kwargs) -> NestedSubParsersAction:
        """Add the sub-parsers action used for child commands."""
        action = self.add_subparsers(
            action=NestedSubParsersAction,
            dest=COMMAND_DEST,
            **kwargs,
        )
        self.command_action = action
        return action

    def defer_required(self, actions: Iterable[argparse.Action]) -> None:
        """Stop argparse from enforcing ``actions`` on this parser alone.

        A global option may be typed below this parser, so its presence can
        only be judged by ``check_deferred`` once the copy-up has happened.
        """
        for action in actions:
            if not action.required:
                continue
            action.required = False
            action.default = argparse.SUPPRESS
            self.deferred_required = (*self.deferred_required, action)

    def check_deferred(self, namespace: argparse.Namespace) -> None:
        missing = [
            '/'.join(action.option_strings) or action.dest
            for action in self.deferred_required
            if not hasattr(namespace, action.dest)
        ]
        if missing:
            self.error(f'the following arguments are required: {", ".join(missing)}')


def global_template(customizer: Customizer) -> CommandParser:
    """Build a parent parser holding inherited copies of global options.

    Inherited copies never set a default and are never required, so a value
    is only recorded at the level where the user actually typed it.
    """
    template = CommandParser(add_help=False)
    customizer(template)
    for action in template._actions:
        action.default = argparse.SUPPRESS
        action.required = False
    return template


def option_actions(customizers: Iterable[Customizer]) -> dict[str, argparse.Action]:
    """Map the namespace attributes written by the given customizers to the
    actions that write them."""
    actions: dict[str, argparse.Action] = {}
    for customizer in customizers:
        template = global_template(customizer)
        for action in template._actions:
            if action.dest not in (None, argparse.SUPPRESS):
                actions[action.dest] = action
    return actions
