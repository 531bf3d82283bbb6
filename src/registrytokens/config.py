"""Configuration for registry-tokens.

registry-tokens is configured by a YAML file. Secrets and deployment-specific
settings such as the database location may instead be injected via
environment variables, which take precedence over the file. Only the settings
with explicit ``validation_alias`` settings support configuration via
environment variable.
"""

from __future__ import annotations

from pathlib import Path
from typing import Self, override

import yaml
from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

__all__ = [
    "CamelCaseSettings",
    "Config",
    "EnvFirstSettings",
]


class CamelCaseSettings(BaseSettings):
    """Base class for Pydantic settings supporting camel-case.

    This base class also forbids all extra attributes.
    """

    model_config = SettingsConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )


class EnvFirstSettings(CamelCaseSettings):
    """Base class for Pydantic settings with environment overrides.

    Classes that inherit from this base class will prioritize environment
    variables over arguments to the class constructor.
    """

    @override
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support. Allow environment
        variables to override init parameters, since init parameters come
        from the YAML configuration file.
        """
        return (env_settings, init_settings)


class Config(EnvFirstSettings):
    """Configuration for registry-tokens."""

    database_url: str = Field(
        ...,
        title="Database URL",
        description=(
            "SQLAlchemy URL for the registry database. A plain"
            " ``postgresql`` scheme is switched to the asyncpg driver."
        ),
        validation_alias=AliasChoices(
            "REGISTRY_TOKENS_DATABASE_URL", "databaseUrl"
        ),
    )

    database_password: SecretStr | None = Field(
        None,
        title="Database password",
        description="Password for the database, if not given in the URL",
        validation_alias=AliasChoices(
            "REGISTRY_TOKENS_DATABASE_PASSWORD", "databasePassword"
        ),
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Logging level",
        description="Python logging level",
        validation_alias=AliasChoices(
            "REGISTRY_TOKENS_LOG_LEVEL", "logLevel"
        ),
    )

    profile: Profile = Field(
        Profile.production,
        title="Logging profile",
        description="Use ``development`` for human-readable log output",
        validation_alias=AliasChoices("REGISTRY_TOKENS_PROFILE", "profile"),
    )

    @field_validator("database_url")
    @classmethod
    def _validate_database_url(cls, v: str) -> str:
        try:
            make_url(v)
        except ArgumentError as e:
            raise ValueError(f"invalid database URL: {e}") from e
        return v

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct a Config object from a configuration file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding `Config` object.
        """
        with path.open("r") as f:
            return cls.model_validate(yaml.safe_load(f) or {})

    def configure_logging(self) -> None:
        """Configure logging based on the registry-tokens configuration."""
        configure_logging(
            name="registrytokens",
            profile=self.profile,
            log_level=self.log_level,
        )
