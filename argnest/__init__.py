"""Multi-level subcommands for argparse with shared, per-level context."""

from argnest.command import Command, file_stem
from argnest.commander import Commander
from argnest.config import AppSettings, SettingsError, load_settings
from argnest.errors import ArgnestError, ConfigurationError, ParseError, RunnerError
from argnest.matches import Matches
from argnest.models import Outcome

__version__ = '0.0.0.dev0'

__all__ = [
    'AppSettings',
    'ArgnestError',
    'Command',
    'Commander',
    'ConfigurationError',
    'Matches',
    'Outcome',
    'ParseError',
    'RunnerError',
    'SettingsError',
    '__version__',
    'file_stem',
    'load_settings',
]
