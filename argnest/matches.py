"""Parsed values for one node of the command tree."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from typing import Any, TypeVar

from argnest.errors import ParseError
from argnest.parser import (
    COMMAND_DEST,
    INTERNAL_ATTRS,
    SUBMATCH_ATTR,
    UNMATCHED_ATTR,
)

T = TypeVar('T')


class Matches:
    """Values parsed by a single parser, plus the selected child's matches.

    Lookups fall back to the parent's matches when this node did not declare
    the requested value, so a runner can read options declared higher up in
    the tree (the environment flag of the root, for example).
    """

    def __init__(
        self,
        namespace: argparse.Namespace,
        *,
        parser: argparse.ArgumentParser | None = None,
        parent: Matches | None = None,
        name: str | None = None,
    ) -> None:
        self._namespace = namespace
        self._parser = parser
        self.parent = parent
        self.name = name
        self.child: Matches | None = None

        child_namespace = getattr(namespace, SUBMATCH_ATTR, None)
        child_name = getattr(namespace, COMMAND_DEST, None)
        if child_namespace is not None and child_name is not None:
            self.child = Matches(
                child_namespace,
                parser=self._child_parser(child_name),
                parent=self,
                name=child_name,
            )

    def _child_parser(self, name: str) -> argparse.ArgumentParser | None:
        action = getattr(self._parser, 'command_action', None)
        if action is None:
            return None
        return action.choices.get(name)

    @property
    def parser(self) -> argparse.ArgumentParser | None:
        return self._parser

    @property
    def namespace(self) -> argparse.Namespace:
        return self._namespace

    @property
    def values(self) -> dict[str, Any]:
        """Values declared by this node's parser only."""
        return {key: value for key, value in vars(self._namespace).items() if key not in INTERNAL_ATTRS}

    @property
    def path(self) -> tuple[str, ...]:
        """Command names leading from the root to this node."""
        if self.parent is None:
            return ()
        return (*self.parent.path, self.name)

    @property
    def subcommand_name(self) -> str | None:
        return self.child.name if self.child is not None else None

    @property
    def subcommand_matches(self) -> Matches | None:
        return self.child

    @property
    def subcommand(self) -> tuple[str | None, Matches | None]:
        return self.subcommand_name, self.child

    @property
    def unmatched(self) -> tuple[str, ...]:
        """Tokens left over when no registered subcommand name matched."""
        return tuple(getattr(self._namespace, UNMATCHED_ATTR, ()))

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def value_of(self, name: str, default: Any = None) -> Any:
        node: Matches | None = self
        while node is not None:
            if name in node:
                value = getattr(node._namespace, name)
                return default if value is None else value
            node = node.parent
        return default

    def is_present(self, name: str) -> bool:
        """Whether ``name`` holds a value at this node or any ancestor.

        Options left at a ``None`` default and flags that were not given
        (``False``) count as absent.
        """
        node: Matches | None = self
        while node is not None:
            value = node.values.get(name)
            if value is not None and value is not False:
                return True
            node = node.parent
        return False

    def value_as(
        self,
        name: str,
        converter: Callable[[Any], T],
        default: T | None = None,
    ) -> T | None:
        """Convert a value with ``converter``, returning ``default`` when unset.

        Raises:
            ParseError: The value cannot be converted.
        """
        value = self.value_of(name)
        if value is None:
            return default
        try:
            return converter(value)
        except (TypeError, ValueError) as exc:
            converter_name = getattr(converter, '__name__', repr(converter))
            msg = f'invalid {converter_name} value for {name}: {value!r}'
            raise ParseError(msg, prog=self.prog) from exc

    def flag(self, name: str) -> bool:
        return bool(self.value_of(name, False))

    @property
    def prog(self) -> str:
        return self._parser.prog if self._parser is not None else ''

    def help_text(self) -> str:
        """Help text of the parser that produced these matches."""
        if self._parser is None:
            return ''
        return self._parser.format_help()

    def __repr__(self) -> str:
        return f'Matches(path={self.path!r}, values={self.values!r}, subcommand={self.subcommand_name!r})'
