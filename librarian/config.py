"""Application configuration."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class DatabaseSettings(BaseModel):
    """Database configuration."""

    # SQLite keeps the whole invite store in one local file
    url: str = "sqlite+aiosqlite:///./.klibrarian/database.sqlite"


class PlatformSettings(BaseModel):
    """Connection settings shared by every media server."""

    # Base URL the API client talks to
    host: str
    username: str
    password: str

    # Public hostname when the server runs behind a reverse proxy
    hostname: str | None = None

    @property
    def public_host(self) -> str:
        """Host that newly created users should be sent to."""
        return self.hostname or self.host

    @model_validator(mode="after")
    def validate_not_empty(self) -> "PlatformSettings":
        """Reject blank connection fields."""
        for field in ("host", "username", "password"):
            if not getattr(self, field).strip():
                raise ValueError(f"{field} cannot be empty")
        return self


class KomgaSettings(PlatformSettings):
    """Komga instance configuration (required)."""

    host: str = "https://demo.komga.org"
    username: str = "demo@komga.org"
    password: str = "demo"


class NavidromeSettings(PlatformSettings):
    """Navidrome instance configuration (optional)."""


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends only when a token is present
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Values are read, highest priority first, from init arguments,
    environment variables, a ``.env`` file and ``config.toml``:

        TOKEN=my-admin-token
        KOMGA__HOST=https://komga.example.com
        KOMGA__HOSTNAME=https://books.example.com
        NAVIDROME__HOST=http://navidrome:4533

    Navidrome is only enabled when a ``navidrome`` section is present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows KOMGA__HOST syntax
        toml_file="config.toml",
        extra="ignore",
    )

    environment: Literal["test", "development", "production"] = "development"
    debug: bool = False

    # Web server bind address
    host: str = "127.0.0.1"
    port: int = 5148

    # Shared secret for the admin panel
    token: str = "this-is-your-auth-token"

    # Top-level SQLite file path, the key used by existing config.toml files
    db_path: str | None = Field(
        default=None, validation_alias=AliasChoices("db-path", "db_path")
    )
    database: DatabaseSettings = DatabaseSettings()
    komga: KomgaSettings = KomgaSettings()
    navidrome: NavidromeSettings | None = None
    observability: ObservabilitySettings = ObservabilitySettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add config.toml as the lowest priority source."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @model_validator(mode="after")
    def validate_server(self) -> "Settings":
        """Validate the server section."""
        if not self.host.strip():
            raise ValueError("Host cannot be empty")
        if self.port == 0:
            raise ValueError("Port cannot be 0")
        if not self.token.strip():
            raise ValueError("Auth token cannot be empty")
        return self

    @model_validator(mode="after")
    def apply_db_path(self) -> "Settings":
        """Use ``db-path`` as the SQLite file unless a database URL is set."""
        if self.db_path and "database" not in self.model_fields_set:
            self.database = DatabaseSettings(url=f"sqlite+aiosqlite:///{self.db_path}")
        return self

    @property
    def database_url(self) -> str:
        """Shortcut for the database URL."""
        return self.database.url

    @property
    def has_navidrome(self) -> bool:
        """Whether a Navidrome server is configured."""
        return self.navidrome is not None
