"""Komga infrastructure providers."""

from dishka import Scope, provide

from librarian.adapter.komga import HttpKomgaClient
from librarian.config import Settings
from librarian.domain.service import KomgaClient
from librarian.util.di.base import ProviderBase


class KomgaProvider(ProviderBase):
    """Komga component base."""

    __mock_component__ = "komga"


class ProdKomgaProvider(KomgaProvider):
    """Production Komga provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_komga_client(self, settings: Settings) -> KomgaClient:
        """Provide Komga HTTP client."""
        return HttpKomgaClient(
            host=settings.komga.host,
            username=settings.komga.username,
            password=settings.komga.password,
            public_host=settings.komga.public_host,
        )
