"""Runtime configuration for dsjob.

Values are read from ``DSJOB_*`` environment variables (and an optional
``.env`` file in the working directory).  Connection values given on the
command line always take precedence over these.
"""

from __future__ import annotations

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dsjob.exceptions import EnvironmentError

_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DsjobSettings(BaseSettings):
    """Central configuration contract shared by the CLI and the engine adapter."""

    model_config = SettingsConfigDict(
        env_prefix="DSJOB_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    domain: str | None = Field(
        default=None,
        description="Services tier domain, optionally with ':<port>'.",
    )
    server: str | None = Field(
        default=None,
        description="Engine host name.",
    )
    user: str | None = Field(
        default=None,
        description="User name for the engine connection.",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Password for the engine connection.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Threshold for diagnostic logging on stderr.",
    )
    dsapi_library: str | None = Field(
        default=None,
        description="Explicit path to the engine's native client library.",
    )
    encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Text encoding used when talking to the native library.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def password_value(self) -> str | None:
        """Return the configured password in clear text, if any."""
        if self.password is None:
            return None
        return self.password.get_secret_value()


def load_settings() -> DsjobSettings:
    """Load settings, mapping validation failures into :class:`EnvironmentError`."""
    try:
        return DsjobSettings()
    except ValidationError as exc:
        raise EnvironmentError(
            f"Invalid dsjob configuration: {exc.error_count()} error(s).",
            hint="Check the DSJOB_* environment variables and any .env file.",
        ) from exc
