"""Platform client aggregator provider."""

from typing import Optional

from dishka import Scope, provide

from librarian.domain.service import KomgaClient, NavidromeClient, RemotePlatformClient
from librarian.domain.value import InviteKind
from librarian.util.di.base import ProviderBase


class PlatformAggregatorProvider(ProviderBase):
    """Provider that aggregates the configured platform clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_platform_clients(
        self,
        komga_client: KomgaClient,
        navidrome_client: Optional[NavidromeClient],
    ) -> dict[InviteKind, RemotePlatformClient]:
        """Provide dictionary of platform clients by invite kind.

        Args:
            komga_client: Komga client (always configured)
            navidrome_client: Navidrome client, None if not configured

        Returns:
            Dictionary mapping InviteKind to its client
        """
        clients: dict[InviteKind, RemotePlatformClient] = {
            InviteKind.KOMGA: komga_client,
        }
        if navidrome_client is not None:
            clients[InviteKind.NAVIDROME] = navidrome_client
        return clients
