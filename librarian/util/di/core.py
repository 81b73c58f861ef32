"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from librarian.config import Settings
from librarian.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables, .env and config.toml.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return Settings()
