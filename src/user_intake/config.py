"""Load an ``IntakeConfig`` from an optional YAML file plus the environment.

Environment variables win over the file.  ``.env`` files are picked up by
``python-dotenv`` in the CLI before this module is consulted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from user_intake.models import IntakeConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "USER_INTAKE_"

# env suffix -> (section, key)
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "DB_DRIVER": ("database", "driver"),
    "DB_HOST": ("database", "host"),
    "DB_PORT": ("database", "port"),
    "DB_USER": ("database", "user"),
    "DB_PASSWORD": ("database", "password"),
    "DB_NAME": ("database", "database"),
    "LOG_LEVEL": ("settings", "log_level"),
}


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> IntakeConfig:
    """Build and validate the config.

    Raises ``pydantic.ValidationError`` on bad values and ``yaml.YAMLError``
    on unparsable YAML.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        loaded = yaml.safe_load(Path(path).read_text())
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"{path} must contain a YAML mapping")
            raw = loaded
        logger.debug("Loaded config file %s", path)

    environ = os.environ if env is None else env
    for suffix, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is None:
            continue
        section_values = raw.get(section) or {}
        if not isinstance(section_values, dict):
            raise ValueError(f"{section} must be a mapping")
        section_values[key] = value
        raw[section] = section_values
        logger.debug("Config %s.%s overridden from environment", section, key)

    return IntakeConfig.model_validate(raw)
