"""Application layer DI providers."""

from dishka import Scope, provide

from librarian.application.usecase.invite import (
    CreateInviteUseCase,
    DeleteInviteUseCase,
    GetInviteConfigUseCase,
    GetInviteUseCase,
    GetServerInfoUseCase,
    ListInvitesUseCase,
    RedeemInviteUseCase,
)
from librarian.domain.service import (
    InviteService,
    RedemptionService,
    RemotePlatformClient,
)
from librarian.domain.value import InviteKind
from librarian.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self, invite_service: InviteService
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_get_invite_use_case(self, invite_service: InviteService) -> GetInviteUseCase:
        """Provide get invite use case."""
        return GetInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_list_invites_use_case(
        self, invite_service: InviteService
    ) -> ListInvitesUseCase:
        """Provide list invites use case."""
        return ListInvitesUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_invite_use_case(
        self, invite_service: InviteService
    ) -> DeleteInviteUseCase:
        """Provide delete invite use case."""
        return DeleteInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_redeem_invite_use_case(
        self, redemption_service: RedemptionService
    ) -> RedeemInviteUseCase:
        """Provide redeem invite use case."""
        return RedeemInviteUseCase(redemption_service=redemption_service)

    @provide(scope=Scope.REQUEST)
    def get_invite_config_use_case(
        self, platform_clients: dict[InviteKind, RemotePlatformClient]
    ) -> GetInviteConfigUseCase:
        """Provide get invite config use case."""
        return GetInviteConfigUseCase(platform_clients=platform_clients)

    @provide(scope=Scope.REQUEST)
    def get_server_info_use_case(
        self, platform_clients: dict[InviteKind, RemotePlatformClient]
    ) -> GetServerInfoUseCase:
        """Provide get server info use case."""
        return GetServerInfoUseCase(platform_clients=platform_clients)
