"""Configuration management for the Athena adapter.

Handles TOML config files, environment variables, named profiles,
and configuration precedence resolution.

Precedence order (highest to lowest):
1. CLI flags (--database, --output-location, etc.)
2. Environment variables (ATHENA_DATABASE, ATHENA_OUTPUT_LOCATION, ...)
3. Named profile (--profile or ATHENA_PROFILE env var)
4. Config file defaults
5. Built-in defaults
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from athena_adapter.core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "athena-adapter" / "config.toml"

DEFAULT_WORKGROUP = "primary"
DEFAULT_POLL_INTERVAL = 0.5
OUTPUT_FORMATS = ("table", "json", "csv")

_ATHENA_ENV_VARS: dict[str, str] = {
    "ATHENA_DATABASE": "database",
    "ATHENA_OUTPUT_LOCATION": "output_location",
    "ATHENA_WORKGROUP": "workgroup",
    "AWS_DEFAULT_REGION": "region",
    "AWS_REGION": "region",
    "AWS_PROFILE": "aws_profile",
}

_PROFILE_DEFAULTS: dict[str, Any] = {
    "database": None,
    "output_location": None,
    "workgroup": DEFAULT_WORKGROUP,
    "region": None,
    "aws_profile": None,
    "access_key_id": None,
    "secret_access_key": None,
    "session_token": None,
}


def validate_output_location(v: str | None) -> str | None:
    if v is not None and not v.startswith("s3://"):
        msg = f"Invalid output location: '{v}'. Expected an s3:// URI"
        raise ValueError(msg)
    return v


class AthenaProfile(BaseModel):
    database: str | None = None
    output_location: str | None = None
    workgroup: str = DEFAULT_WORKGROUP
    region: str | None = None
    aws_profile: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None

    @field_validator("output_location")
    @classmethod
    def check_output_location(cls, v: str | None) -> str | None:
        return validate_output_location(v)


class AppConfig(BaseModel):
    poll_interval: float = DEFAULT_POLL_INTERVAL
    deadline: float | None = None
    default_format: str = "table"
    default_profile: str | None = None
    profiles: dict[str, AthenaProfile] = {}

    @field_validator("poll_interval")
    @classmethod
    def check_poll_interval(cls, v: float) -> float:
        if v <= 0:
            msg = f"Invalid poll_interval: {v}. Must be positive"
            raise ValueError(msg)
        return v

    @field_validator("default_format")
    @classmethod
    def check_default_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            formats = ", ".join(OUTPUT_FORMATS)
            msg = f"Invalid default_format: '{v}'. Expected one of: {formats}"
            raise ValueError(msg)
        return v


class ResolvedConfig(BaseModel):
    database: str | None = None
    output_location: str | None = None
    workgroup: str = DEFAULT_WORKGROUP
    region: str | None = None
    aws_profile: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    deadline: float | None = None
    default_format: str = "table"
    active_profile: str | None = None
    sources: dict[str, str] = {}

    @field_validator("output_location")
    @classmethod
    def check_output_location(cls, v: str | None) -> str | None:
        return validate_output_location(v)

    def aws_config(self) -> dict[str, Any]:
        """Keyword arguments for boto3.Session, omitting unset values."""
        session_kwargs = {
            "region_name": self.region,
            "profile_name": self.aws_profile,
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
        }
        return {k: v for k, v in session_kwargs.items() if v is not None}


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file.

    Returns default AppConfig if file doesn't exist.
    Raises ConfigError on malformed TOML or invalid config.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Malformed TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AppConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigError(msg) from e


def resolve_config(
    config: AppConfig,
    profile_name: str | None = None,
    **cli_overrides: Any,
) -> ResolvedConfig:
    """Resolve configuration using precedence chain.

    CLI > env > profile > config defaults > built-in defaults.
    """
    sources: dict[str, str] = {}
    resolved: dict[str, Any] = {}

    # Layer 1: Built-in defaults
    resolved.update(_PROFILE_DEFAULTS)
    resolved["poll_interval"] = DEFAULT_POLL_INTERVAL
    resolved["deadline"] = None
    resolved["default_format"] = "table"
    for key in resolved:
        sources[key] = "default"

    # Layer 2: Config file global defaults
    for key in ("poll_interval", "deadline", "default_format"):
        if key in config.model_fields_set:
            resolved[key] = getattr(config, key)
            sources[key] = "config"

    # Layer 3: Named profile
    effective_profile = profile_name
    if not effective_profile:
        effective_profile = os.environ.get("ATHENA_PROFILE")
    if not effective_profile:
        effective_profile = config.default_profile

    if effective_profile:
        if effective_profile not in config.profiles:
            available = (
                ", ".join(sorted(config.profiles.keys())) if config.profiles else "none"
            )
            msg = f"Unknown profile: '{effective_profile}'. Available profiles: {available}"
            raise ConfigError(msg)
        profile = config.profiles[effective_profile]
        for key in profile.model_fields_set:
            if key in resolved:
                resolved[key] = getattr(profile, key)
                sources[key] = f"profile: {effective_profile}"

    # Layer 4: Environment variables (AWS_REGION wins over AWS_DEFAULT_REGION)
    for env_var, field_name in _ATHENA_ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is not None:
            resolved[field_name] = value
            sources[field_name] = f"env: {env_var}"

    # Layer 5: CLI flags (highest priority)
    cli_to_field = {
        "database": "database",
        "output_location": "output_location",
        "workgroup": "workgroup",
        "region": "region",
        "aws_profile": "aws_profile",
        "poll_interval": "poll_interval",
        "timeout": "deadline",
    }
    for cli_name, field_name in cli_to_field.items():
        value = cli_overrides.get(cli_name)
        if value is not None:
            resolved[field_name] = value
            flag = cli_name.replace("_", "-")
            sources[field_name] = f"cli: --{flag}"

    resolved["active_profile"] = effective_profile
    resolved["sources"] = sources
    try:
        return ResolvedConfig(**resolved)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
