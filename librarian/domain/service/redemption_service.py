"""Redemption domain service.

Redeeming an invite creates the account on the remote media server,
applies the invite's restrictions to it and then consumes the invite.

Business rules:
- Credentials must target the same platform as the invite
- The remote user id is saved as soon as the account exists, so a retry
  after a failed restriction step skips account creation
- The invite is deleted only after restrictions were applied
"""

from collections.abc import Mapping
from typing import Any

import logfire

from librarian.domain.error import ClientUnavailableError, WrongInviteKindError
from librarian.domain.model import (
    KomgaCredentials,
    KomgaInvite,
    KomgaRestriction,
    KomgaUserCreate,
    NavidromeCredentials,
    NavidromeInvite,
    NavidromeLibraryAccess,
    NavidromeUserCreate,
    invite_kind,
    parse_credentials,
)
from librarian.domain.repository import InviteRepository
from librarian.domain.service.invite_service import InviteService
from librarian.domain.service.platform import RemotePlatformClient
from librarian.domain.value import KOMGA_DEFAULT_ROLES, InviteKind, TokenId

from .base import Service


class RedemptionService(Service):
    """Domain service that turns an invite into a remote account."""

    def __init__(
        self,
        invite_service: InviteService,
        invite_repository: InviteRepository,
        platform_clients: dict[InviteKind, RemotePlatformClient],
    ) -> None:
        """Initialize redemption service.

        Args:
            invite_service: Invite service, used for expiry-aware lookups
            invite_repository: Invite repository
            platform_clients: Clients for every configured platform
        """
        self.invite_service = invite_service
        self.invite_repository = invite_repository
        self.platform_clients = platform_clients

    async def redeem(
        self,
        token_id: TokenId,
        credentials: KomgaCredentials | NavidromeCredentials | Mapping[str, Any],
    ) -> str:
        """Redeem an invite.

        Raw credentials without a ``kind`` are validated against the
        invite's own platform once it is loaded.

        Args:
            token_id: Invite token
            credentials: Validated credentials, or the raw payload

        Returns:
            Public host of the platform the account was created on

        Raises:
            InviteNotFoundError: If the invite does not exist
            InviteExpiredError: If the invite has expired
            InvalidCredentialsError: If raw credentials fail validation
            WrongInviteKindError: If credentials target another platform
            ClientUnavailableError: If the platform is not configured
            RemotePlatformError: If the remote server rejects a request
        """
        with logfire.span("redemption_service.redeem", token=str(token_id)):
            invite = await self.invite_service.fetch(token_id)
            if not isinstance(credentials, (KomgaCredentials, NavidromeCredentials)):
                credentials = parse_credentials(credentials, default_kind=invite.kind)

            user: Any
            restriction: Any
            match (invite, credentials):
                case (KomgaInvite(), KomgaCredentials()):
                    roles = invite.option.roles
                    user = KomgaUserCreate(
                        email=credentials.email,
                        password=credentials.password,
                        roles=list(KOMGA_DEFAULT_ROLES) if roles is None else roles,
                    )
                    restriction = KomgaRestriction.from_option(invite.option)
                case (NavidromeInvite(), NavidromeCredentials()):
                    user = NavidromeUserCreate(
                        user_name=credentials.username,
                        name=credentials.username,
                        email=credentials.email,
                        password=credentials.password,
                        is_admin=invite.option.is_admin,
                    )
                    restriction = NavidromeLibraryAccess.from_option(invite.option)
                case _:
                    logfire.warn(
                        "Credentials do not match invite kind",
                        token=str(token_id),
                        invite_kind=invite.kind,
                        credentials_kind=credentials.kind,
                    )
                    raise WrongInviteKindError(invite.kind, credentials.kind)

            kind = invite_kind(invite)
            client = self.platform_clients.get(kind)
            if client is None:
                logfire.warn("Platform client unavailable", platform=kind.value)
                raise ClientUnavailableError(kind.value)

            remote_user_id = invite.remote_user_id
            if remote_user_id is None:
                remote_user = await client.create_remote_user(user)
                remote_user_id = remote_user.id
                await self.invite_repository.set_remote_user_id(
                    token_id, remote_user_id
                )
                logfire.info(
                    "Remote user created",
                    token=str(token_id),
                    platform=kind.value,
                    remote_user_id=remote_user_id,
                )
            else:
                logfire.info(
                    "Resuming redemption for existing remote user",
                    token=str(token_id),
                    platform=kind.value,
                    remote_user_id=remote_user_id,
                )

            await client.apply_remote_restrictions(remote_user_id, restriction)
            await self.invite_repository.delete(token_id)

            logfire.info(
                "Invite redeemed",
                token=str(token_id),
                platform=kind.value,
                remote_user_id=remote_user_id,
            )
            return client.public_host
