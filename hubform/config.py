"""Configuration for hubform.

Settings are resolved once at process start from (lowest to highest
precedence):

1. A YAML config file (``$HUBFORM_CONFIG`` or ``~/.config/hubform/config.yaml``)
2. A ``.env`` file in the working directory
3. The process environment

The resolved HubFormSettings is passed explicitly into the fetcher,
submitter and web app; nothing below this module reads the environment.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hubform.errors import HubFormError

DEFAULT_ALLOWED_ORIGIN = "http://localhost:3000"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8888

# Environment variable -> settings field
ENV_KEYS: dict[str, str] = {
    "HUBSPOT_API_TOKEN": "api_token",
    "PORTALID": "portal_id",
    "CONTACTFORMID": "form_id",
    "HUBFORM_ALLOWED_ORIGIN": "allowed_origin",
    "HUBFORM_HOST": "host",
    "PORT": "port",
    "HUBFORM_HTTP_TIMEOUT": "http_timeout",
    "HUBFORM_LOG_LEVEL": "log_level",
}


class ConfigError(HubFormError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        self.problems = problems or []
        super().__init__(message)


class HubFormSettings(BaseModel):
    """Process-wide settings, validated once at startup."""

    api_token: str
    portal_id: str
    form_id: str
    allowed_origin: str = DEFAULT_ALLOWED_ORIGIN
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, gt=0, lt=65536)
    http_timeout: float | None = Field(default=None, gt=0)
    log_level: str = "INFO"

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("api_token", "portal_id", "form_id", "allowed_origin", "host")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("allowed_origin")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        # Browsers send Origin without a trailing slash
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def get_hubform_home(env: Mapping[str, str | None] | None = None) -> Path:
    """Return the hubform configuration directory.

    Args:
        env: Environment mapping to read ``HUBFORM_HOME`` from
            (default: ``os.environ``).
    """
    if env is None:
        env = os.environ
    env_home = env.get("HUBFORM_HOME")
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "hubform"


def get_config_path(env: Mapping[str, str | None] | None = None) -> Path:
    """Return the default YAML config file path."""
    return get_hubform_home(env) / "config.yaml"


def load_config_file(path: Path | str, required: bool = False) -> dict[str, Any]:
    """Load settings values from a YAML file.

    Args:
        path: Path to the YAML file.
        required: If True, a missing file is an error.

    Returns:
        Dict of settings field name -> value (empty if the file is absent).

    Raises:
        ConfigError: If the file is required but missing, or is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return {}

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    env: Mapping[str, str | None] | None = None,
    config_path: Path | str | None = None,
    dotenv_path: Path | str | None = ".env",
) -> HubFormSettings:
    """Resolve and validate settings.

    Args:
        env: Environment mapping (default: ``.env`` overlaid by ``os.environ``).
        config_path: Explicit YAML config file. Falls back to
            ``HUBFORM_CONFIG`` from the environment, then the default path.
        dotenv_path: ``.env`` file to read when ``env`` is not given.

    Returns:
        Validated HubFormSettings.

    Raises:
        ConfigError: If any required value is missing or invalid.
    """
    if env is None:
        dotenv = dotenv_values(dotenv_path) if dotenv_path else {}
        env = {**dotenv, **os.environ}

    explicit = config_path is not None or bool(env.get("HUBFORM_CONFIG"))
    path = config_path or env.get("HUBFORM_CONFIG") or get_config_path(env)
    values = load_config_file(path, required=explicit)

    for env_key, field_name in ENV_KEYS.items():
        raw = env.get(env_key)
        if raw is not None:
            values[field_name] = raw

    try:
        return HubFormSettings.model_validate(values)
    except ValidationError as e:
        field_to_env = {v: k for k, v in ENV_KEYS.items()}
        problems = []
        for err in e.errors():
            loc = str(err["loc"][0]) if err["loc"] else "<root>"
            problems.append(f"{field_to_env.get(loc, loc)}: {err['msg']}")
        raise ConfigError(
            "Invalid hubform configuration: " + "; ".join(problems),
            problems=problems,
        ) from e
