"""
Generator configuration.

Settings come from an optional YAML or JSON file and are then overridden by
environment variables:

    OASGEN_CONFIG_PATH    file to load when no explicit path is given
    OASGEN_LOG_LEVEL      overrides ``log_level``
    OASGEN_OUTPUT_FORMAT  overrides ``output_format``
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .constants import OPENAPI_VERSION
from .enums.output_format import OutputFormat
from .exceptions.configuration_error import ConfigurationError

LOGGER = logging.getLogger(__name__)

ENV_CONFIG_PATH = "OASGEN_CONFIG_PATH"
ENV_LOG_LEVEL = "OASGEN_LOG_LEVEL"
ENV_OUTPUT_FORMAT = "OASGEN_OUTPUT_FORMAT"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GeneratorConfig(BaseModel):
    """Settings shared by the CLI commands."""

    model_config = ConfigDict(extra="ignore", use_enum_values=False)

    openapi_version: str = OPENAPI_VERSION
    output_format: OutputFormat = OutputFormat.JSON
    log_level: str = "INFO"
    title: str = ""
    version: str = ""

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """Load the configuration file, if any, and apply environment overrides.

        Raises:
            ConfigurationError: If the file is missing, malformed or invalid.
        """
        raw_path = config_path or os.environ.get(ENV_CONFIG_PATH)
        data = _read_file(Path(raw_path)) if raw_path else {}

        if ENV_LOG_LEVEL in os.environ:
            data["log_level"] = os.environ[ENV_LOG_LEVEL]
        if ENV_OUTPUT_FORMAT in os.environ:
            data["output_format"] = os.environ[ENV_OUTPUT_FORMAT].lower()

        try:
            config = cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc
        return config


def _read_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    try:
        with path.open(encoding="utf-8") as handle:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(handle)
            elif suffix == ".json":
                data = json.load(handle)
            else:
                raise ConfigurationError(f"Unsupported configuration format: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Error loading configuration: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")
    LOGGER.debug("Loaded configuration from %s", path)
    return data


__all__ = ["ENV_CONFIG_PATH", "ENV_LOG_LEVEL", "ENV_OUTPUT_FORMAT", "GeneratorConfig"]
