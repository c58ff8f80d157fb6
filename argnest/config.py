"""Application settings for argnest command trees, optionally read from YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from argnest.errors import ArgnestError
from argnest.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS_FILENAME = 'argnest.yaml'


class SettingsError(ArgnestError):
    """Raised when argnest settings are invalid."""


class AppSettings(BaseModel):
    """Top-level presentation settings for a command tree."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    prog: str | None = None
    description: str | None = None
    epilog: str | None = None
    version: str | None = None
    help_on_error: bool = True
    no_match_message: str = 'No subcommand matched'

    @field_validator('prog')
    @classmethod
    def validate_prog(cls, v: str | None) -> str | None:
        """Validate that prog is not blank."""
        if v is None:
            return v
        if not v.strip():
            msg = 'Program name cannot be empty'
            raise ValueError(msg)
        return v.strip()


def _load_yaml_settings(settings_path: Path) -> dict[str, Any]:
    if not settings_path.exists():
        msg = f'settings file not found: {settings_path}'
        raise SettingsError(msg)

    logger.debug('loading_settings', settings=str(settings_path))
    try:
        with settings_path.open() as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        msg = f'failed to parse YAML: {exc}'
        raise SettingsError(msg) from exc

    if not isinstance(data, dict):
        msg = f'settings root must be a mapping in {settings_path}'
        raise SettingsError(msg)

    return data


def load_settings(settings_path: Path) -> AppSettings:
    """Load AppSettings from a YAML file."""
    data = _load_yaml_settings(settings_path)
    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        msg = f'invalid settings in {settings_path}: {exc}'
        raise SettingsError(msg) from exc
