"""Domain layer DI providers."""

from dishka import Scope, provide

from librarian.domain.repository import InviteRepository
from librarian.domain.service import (
    InviteService,
    RedemptionService,
    RemotePlatformClient,
)
from librarian.domain.value import InviteKind
from librarian.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped; the repository and clients they wrap are
    application-wide.
    """

    scope = Scope.REQUEST

    @provide
    def get_invite_service(self, invite_repository: InviteRepository) -> InviteService:
        """Provide invite domain service."""
        return InviteService(invite_repository=invite_repository)

    @provide
    def get_redemption_service(
        self,
        invite_service: InviteService,
        invite_repository: InviteRepository,
        platform_clients: dict[InviteKind, RemotePlatformClient],
    ) -> RedemptionService:
        """Provide redemption domain service."""
        return RedemptionService(
            invite_service=invite_service,
            invite_repository=invite_repository,
            platform_clients=platform_clients,
        )
