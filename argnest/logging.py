import logging

import structlog
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from structlog.typing import EventDict

console = Console(stderr=True)

# Type alias for our logger
Logger = structlog.stdlib.BoundLogger

HIDDEN_PREFIXES = ('_verbose_', '_debug_', '_perf_')

LEVEL_STYLES = {
    'INFO': 'blue',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'DEBUG': 'magenta',
    'CRITICAL': 'white on red',
}


def _plain(value: object) -> object:
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def format_context_yaml(event_dict: EventDict, indent: int = 2) -> str:
    """Format the context dictionary as YAML.

    Args:
        event_dict: The context dictionary to format.
        indent: The number of spaces to use for indentation.

    Returns:
        The formatted YAML string.
    """
    if not event_dict:
        return ''
    context_yaml = yaml.safe_dump(
        _plain(event_dict),
        sort_keys=True,
        default_flow_style=False,
    )
    pad = ' ' * indent
    return '\n'.join(f'{pad}{line}' for line in context_yaml.splitlines())


def filter_context_by_prefix(event_dict: EventDict) -> EventDict:
    """Drop keys reserved for verbose output."""
    return {k: v for k, v in event_dict.items() if not k.startswith(HIDDEN_PREFIXES)}


def strip_prefixes_from_keys(event_dict: EventDict) -> EventDict:
    """Remove verbose prefixes so keys read naturally in verbose output."""
    stripped = {}
    for key, value in event_dict.items():
        for prefix in HIDDEN_PREFIXES:
            if key.startswith(prefix):
                key = key.removeprefix(prefix)
                break
        stripped[key] = value
    return stripped


def is_verbose() -> bool:
    return logging.getLogger().getEffectiveLevel() <= logging.DEBUG


def cli_renderer(
    _logger: object,
    method_name: str,
    event_dict: EventDict,
) -> str:
    """Render log messages for CLI output using rich formatting.

    Args:
        _logger: The wrapped logger instance.
        method_name: The logging method name (e.g., 'info', 'error').
        event_dict: The event dictionary containing log data.

    Raises:
        structlog.DropEvent: Always, the event has been printed already.
    """
    level = method_name.upper()
    event_msg = str(event_dict.pop('event', ''))
    for key in ('timestamp', 'level', 'log_level', 'logger'):
        event_dict.pop(key, None)

    if is_verbose():
        event_dict = strip_prefixes_from_keys(event_dict)
    else:
        event_dict = filter_context_by_prefix(event_dict)

    context_yaml = format_context_yaml(event_dict)

    style = LEVEL_STYLES.get(level, 'bold cyan')
    console.print(f'[bold {style}]\\[{level}][/bold {style}] [{style}]{escape(event_msg)}[/{style}]')

    if context_yaml:
        syntax = Syntax(
            context_yaml,
            'yaml',
            theme='github-dark',
            background_color='default',
            line_numbers=False,
        )
        console.print(syntax)
    raise structlog.DropEvent


PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    cli_renderer,
]


def configure_logging(*, verbose: bool = False) -> None:
    """Set the root log level for an argnest application.

    Loggers from ``get_logger`` already carry ``PROCESSORS``, so only the
    stdlib level decides what reaches the terminal.

    Args:
        verbose: Enable verbose/debug output
    """
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def get_logger(name: str) -> Logger:
    """Get a structured logger bound to the stdlib logger ``name``.

    Events below the stdlib level of ``name`` are dropped, so nothing is
    printed until the host application lowers the level (see
    ``configure_logging``).

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
