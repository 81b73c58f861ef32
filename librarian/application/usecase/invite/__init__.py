"""Invite use cases."""

from librarian.application.usecase.invite.common import InviteItem
from librarian.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    CreateKomgaInviteRequest,
    CreateNavidromeInviteRequest,
)
from librarian.application.usecase.invite.delete_invite import (
    DeleteInviteRequest,
    DeleteInviteResponse,
    DeleteInviteUseCase,
)
from librarian.application.usecase.invite.get_invite import (
    GetInviteRequest,
    GetInviteResponse,
    GetInviteUseCase,
)
from librarian.application.usecase.invite.get_invite_config import (
    GetInviteConfigResponse,
    GetInviteConfigUseCase,
    KomgaInviteConfig,
    NavidromeInviteConfig,
)
from librarian.application.usecase.invite.get_server_info import (
    GetServerInfoResponse,
    GetServerInfoUseCase,
)
from librarian.application.usecase.invite.list_invites import (
    ListInvitesResponse,
    ListInvitesUseCase,
)
from librarian.application.usecase.invite.redeem_invite import (
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "CreateKomgaInviteRequest",
    "CreateNavidromeInviteRequest",
    "DeleteInviteRequest",
    "DeleteInviteResponse",
    "DeleteInviteUseCase",
    "GetInviteConfigResponse",
    "GetInviteConfigUseCase",
    "GetInviteRequest",
    "GetInviteResponse",
    "GetInviteUseCase",
    "GetServerInfoResponse",
    "GetServerInfoUseCase",
    "InviteItem",
    "KomgaInviteConfig",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "NavidromeInviteConfig",
    "RedeemInviteRequest",
    "RedeemInviteResponse",
    "RedeemInviteUseCase",
]
