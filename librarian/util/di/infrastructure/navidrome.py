"""Navidrome infrastructure providers."""

from typing import Optional

from dishka import Scope, provide

from librarian.adapter.navidrome import HttpNavidromeClient
from librarian.config import Settings
from librarian.domain.service import NavidromeClient
from librarian.util.di.base import ProviderBase


class NavidromeProvider(ProviderBase):
    """Navidrome component base.

    Provides ``Optional[NavidromeClient]``; None when Navidrome is not
    configured.
    """

    __mock_component__ = "navidrome"


class ProdNavidromeProvider(NavidromeProvider):
    """Production Navidrome provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_navidrome_client(self, settings: Settings) -> Optional[NavidromeClient]:
        """Provide Navidrome HTTP client, if configured.

        The client logs in lazily on its first request.
        """
        if settings.navidrome is None:
            return None
        return HttpNavidromeClient(
            host=settings.navidrome.host,
            username=settings.navidrome.username,
            password=settings.navidrome.password,
            public_host=settings.navidrome.public_host,
        )
