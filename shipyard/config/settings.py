"""
Configuration system using Pydantic for type-safe settings management.

Settings come from ``SHIPYARD_*`` environment variables and, optionally, a
YAML file passed with ``shipyard --config``. The AWS region additionally
honours ``AWS_REGION`` and ``AWS_DEFAULT_REGION``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shipyard.exceptions import ConfigurationError

DEFAULT_HOME = Path.home() / ".shipyard"


class ShipyardSettings(BaseSettings):
    """CLI settings.

    Example YAML:
        region: ${AWS_REGION:-us-west-2}
        store_path: ~/.shipyard/store.yml
        secrets_backend: encrypted_file
        master_password: ${SHIPYARD_MASTER_PASSWORD}
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIPYARD_",
        case_sensitive=False,
        populate_by_name=True,
    )

    region: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SHIPYARD_REGION", "AWS_REGION", "AWS_DEFAULT_REGION"),
        description="Default region of the session",
    )
    store_path: Path = Field(default=DEFAULT_HOME / "store.yml", description="YAML configuration store")
    workspace_root: Path = Field(default=Path("."), description="Project directory holding the shipyard/ workspace")
    secrets_backend: Literal["keyring", "encrypted_file"] = Field(default="keyring")
    secrets_file: Path = Field(default=DEFAULT_HOME / "secrets.enc", description="Encrypted secrets file")
    master_password: SecretStr | None = Field(default=None, description="Password for the encrypted secrets file")
    log_level: str = Field(default="WARNING")

    @field_validator("store_path", "secrets_file", "workspace_root")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> ShipyardSettings:
        """Load settings from YAML file with environment variable interpolation.

        Args:
            config_path: Path to YAML configuration file

        Raises:
            ConfigurationError: If config file is missing, unreadable or invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports ``${VAR_NAME}`` (required) and ``${VAR_NAME:-default}``.
        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
