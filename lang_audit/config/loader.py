"""Load ``Settings`` from a config file, the environment and overrides."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import ValidationError
from pydantic_settings import SettingsError

from ..errors import ConfigurationError
from .settings import Settings

logger = structlog.get_logger(__name__)


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    """Read a YAML or JSON config file into a dict."""
    try:
        text = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {config_file}: {e}",
            config_key="config_file",
            previous_error=e,
        ) from e

    try:
        if config_file.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Config file {config_file} is not valid: {e}",
            config_key="config_file",
            previous_error=e,
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_file} must contain a mapping",
            config_key="config_file",
        )
    return data


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """
    Build settings for one run.

    Args:
        config_file: Optional YAML/JSON file with settings fields
        **overrides: Explicit values (CLI flags); ``None`` values are ignored

    Raises:
        ConfigurationError: the file is unreadable or a value is invalid
    """
    values: Dict[str, Any] = {}
    if config_file is not None:
        values.update(_read_config_file(Path(config_file)))
        logger.debug("Loaded config file", file=str(config_file), keys=sorted(values))

    # Environment variables beat file values, explicit overrides beat both
    values = {k: v for k, v in values.items() if not _env_has(k)}
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = Settings(**values)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration for {key or 'settings'}: {first.get('msg')}",
            config_key=key or None,
            previous_error=e,
        ) from e
    except SettingsError as e:
        # Raised before validation, e.g. a list-valued env var that is not JSON
        raise ConfigurationError(
            f"Invalid configuration: {e}",
            previous_error=e,
        ) from e

    if not settings.base_path.is_absolute():
        settings = settings.model_copy(update={"base_path": settings.base_path.resolve()})
    return settings


def _env_has(field_name: str) -> bool:
    prefix = Settings.model_config.get("env_prefix", "")
    return f"{prefix}{field_name}".upper() in {k.upper() for k in os.environ}
