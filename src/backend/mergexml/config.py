"""
Central configuration for the pre-merge checks.
Values come from a YAML file, then MERGEXML_* environment variables override them.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

# ---- Locations ----
DEFAULT_CONFIG_PATH = "src/infra/mergexml.yaml"
CONFIG_PATH_ENV = "MERGEXML_CONFIG"

# ---- Environment overrides (env var -> config field) ----
ENV_OVERRIDES = {
    "MERGEXML_CURRENCY_CODE": "currency_code",
    "MERGEXML_CURRENCY_CODE_TAG": "currency_code_tag",
    "MERGEXML_MIN_COUNT_FILE": "min_count_file",
    "MERGEXML_MAX_COUNT_FILE": "max_count_file",
    "MERGEXML_LOCATION": "location",
}

# ---- Defaults ----
DEFAULT_CURRENCY_CODE = 643
DEFAULT_MIN_COUNT_FILE = 1
DEFAULT_MAX_COUNT_FILE = 10


class ConfigProperties(BaseModel):
    """Application properties shared by the checks."""
    model_config = ConfigDict(frozen=True)

    currency_code: Union[int, str] = DEFAULT_CURRENCY_CODE
    currency_code_tag: str = "CurrCode"
    min_count_file: int = DEFAULT_MIN_COUNT_FILE
    max_count_file: int = DEFAULT_MAX_COUNT_FILE
    location: Optional[str] = None

    @field_validator('currency_code')
    @classmethod
    def currency_code_must_not_be_empty(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError('currency_code cannot be empty')
        return v

    @field_validator('currency_code_tag')
    @classmethod
    def tag_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('currency_code_tag cannot be empty')
        return v

    @field_validator('min_count_file', 'max_count_file')
    @classmethod
    def count_must_not_be_negative(cls, v):
        if v < 0:
            raise ValueError('file count bounds cannot be negative')
        return v

    @model_validator(mode='after')
    def bounds_must_be_ordered(self):
        if self.min_count_file > self.max_count_file:
            raise ValueError(
                f'min_count_file ({self.min_count_file}) exceeds max_count_file ({self.max_count_file})'
            )
        return self

    @property
    def expected_currency_code(self) -> str:
        """Currency code as compared against document text."""
        return str(self.currency_code)


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """Load the YAML mapping, or an empty one when the file is missing."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        log.warning(f"[config] Config not found at {config_path}, using defaults")
        return {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Unable to read config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {config_path} must contain a mapping")
    # Allow both a flat file and one nested under a top-level "mergexml" key
    return data.get("mergexml", data)


def _env_overrides() -> Dict[str, Any]:
    overrides = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None and value != "":
            overrides[field_name] = value
    return overrides


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigProperties:
    """
    Build ConfigProperties from YAML and environment.

    Lookup order for the file: explicit argument, $MERGEXML_CONFIG,
    DEFAULT_CONFIG_PATH. Environment overrides win over file values.
    """
    path = Path(config_path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
    values = _read_yaml(path)
    values.update(_env_overrides())

    try:
        config = ConfigProperties(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    log.debug(f"[config] Loaded configuration from {path}: {config.model_dump()}")
    return config
