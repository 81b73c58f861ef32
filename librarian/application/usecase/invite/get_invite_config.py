"""Get invite configuration use case."""

import logfire
from pydantic import BaseModel, Field

from librarian.application.usecase.base import BaseUseCase
from librarian.domain.model import KomgaLibrary, NavidromeLibrary
from librarian.domain.service import KomgaClient, NavidromeClient, RemotePlatformClient
from librarian.domain.value import InviteKind


class KomgaInviteConfig(BaseModel):
    """Choices available when creating a Komga invite."""

    active: bool
    labels: list[str] = Field(default_factory=list)
    libraries: list[KomgaLibrary] = Field(default_factory=list)


class NavidromeInviteConfig(BaseModel):
    """Choices available when creating a Navidrome invite."""

    active: bool
    libraries: list[NavidromeLibrary] = Field(default_factory=list)


class GetInviteConfigResponse(BaseModel):
    """Invite configuration response."""

    komga: KomgaInviteConfig
    navidrome: NavidromeInviteConfig


class GetInviteConfigUseCase(BaseUseCase):
    """Use case for listing labels and libraries an invite can grant."""

    def __init__(
        self, platform_clients: dict[InviteKind, RemotePlatformClient]
    ) -> None:
        """Initialize use case.

        Args:
            platform_clients: Clients for every configured platform
        """
        self.platform_clients = platform_clients

    async def execute(self, request: None = None) -> GetInviteConfigResponse:
        """Execute get invite config flow.

        Platforms that are not configured are reported as inactive.

        Raises:
            RemotePlatformError: If a configured server cannot be queried
        """
        with logfire.span("get_invite_config"):
            komga = KomgaInviteConfig(active=False)
            komga_client = self.platform_clients.get(InviteKind.KOMGA)
            if isinstance(komga_client, KomgaClient):
                komga = KomgaInviteConfig(
                    active=True,
                    labels=await komga_client.list_sharing_labels(),
                    libraries=await komga_client.list_libraries(),
                )

            navidrome = NavidromeInviteConfig(active=False)
            navidrome_client = self.platform_clients.get(InviteKind.NAVIDROME)
            if isinstance(navidrome_client, NavidromeClient):
                navidrome = NavidromeInviteConfig(
                    active=True,
                    libraries=await navidrome_client.list_libraries(),
                )

            return GetInviteConfigResponse(komga=komga, navidrome=navidrome)
