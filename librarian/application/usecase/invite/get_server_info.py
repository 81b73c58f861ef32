"""Get server info use case."""

from pydantic import BaseModel

from librarian.application.usecase.base import BaseUseCase
from librarian.domain.service import RemotePlatformClient
from librarian.domain.value import InviteKind
from librarian.version import __version__


class GetServerInfoResponse(BaseModel):
    """Server info response."""

    servers: list[InviteKind]  # Platforms invites can be created for
    v: str


class GetServerInfoUseCase(BaseUseCase):
    """Use case for reporting active platforms and the running version."""

    def __init__(
        self, platform_clients: dict[InviteKind, RemotePlatformClient]
    ) -> None:
        self.platform_clients = platform_clients

    async def execute(self, request: None = None) -> GetServerInfoResponse:
        servers = [kind for kind in InviteKind if kind in self.platform_clients]
        return GetServerInfoResponse(servers=servers, v=__version__)
