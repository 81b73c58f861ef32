"""Invite domain service."""

from typing import assert_never

import logfire

from librarian.domain.error import (
    ExpiredInviteCleanupError,
    InviteExpiredError,
    InviteNotFoundError,
    StoreError,
)
from librarian.domain.model import (
    Invite,
    InviteVariantOption,
    KomgaInvite,
    KomgaInviteOption,
    NavidromeInvite,
    NavidromeInviteOption,
)
from librarian.domain.repository import InviteRepository
from librarian.domain.value import TokenId

from .base import Service


class InviteService(Service):
    """Domain service for the invite lifecycle outside of redemption."""

    def __init__(self, invite_repository: InviteRepository) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
        """
        self.invite_repository = invite_repository

    async def create_invite(self, option: InviteVariantOption) -> Invite:
        """Create a new invite under a freshly minted token.

        Args:
            option: Komga or Navidrome invite options

        Returns:
            Created invite

        Raises:
            StoreError: If the invite cannot be stored
        """
        token = TokenId.generate()
        invite: Invite
        match option:
            case KomgaInviteOption():
                invite = KomgaInvite(token=token, option=option)
            case NavidromeInviteOption():
                invite = NavidromeInvite(token=token, option=option)
            case _:
                assert_never(option)

        with logfire.span(
            "invite_service.create_invite", token=str(token), kind=invite.kind
        ):
            saved = await self.invite_repository.insert(invite)
            logfire.info(
                "Invite created",
                token=str(saved.token),
                kind=saved.kind,
                expires_at=saved.option.expires_at,
            )
            return saved

    async def fetch(self, token_id: TokenId) -> Invite:
        """Get a live invite, purging it if it has expired.

        Args:
            token_id: Invite token

        Returns:
            The invite

        Raises:
            InviteNotFoundError: If no invite exists for the token
            InviteExpiredError: If the invite expired (it is deleted first)
            ExpiredInviteCleanupError: If deleting the expired invite failed
        """
        with logfire.span("invite_service.fetch", token=str(token_id)):
            invite = await self.invite_repository.get(token_id)
            if invite is None:
                logfire.warn("Invite not found", token=str(token_id))
                raise InviteNotFoundError(str(token_id))

            if invite.is_expired():
                logfire.info(
                    "Invite expired, deleting",
                    token=str(token_id),
                    expires_at=invite.option.expires_at,
                )
                try:
                    await self.invite_repository.delete(token_id)
                except StoreError as e:
                    logfire.error(
                        "Failed to delete expired invite",
                        token=str(token_id),
                        error=str(e),
                    )
                    raise ExpiredInviteCleanupError(str(token_id), e) from e
                raise InviteExpiredError(str(token_id))

            return invite

    async def delete_invite(self, token_id: TokenId) -> None:
        """Delete an invite. Missing tokens are ignored.

        Args:
            token_id: Invite token
        """
        with logfire.span("invite_service.delete_invite", token=str(token_id)):
            await self.invite_repository.delete(token_id)
            logfire.info("Invite deleted", token=str(token_id))

    async def list_invites(self) -> list[Invite]:
        """List every stored invite, expired ones included.

        Returns:
            List of invites
        """
        with logfire.span("invite_service.list_invites"):
            invites = await self.invite_repository.list_all()
            logfire.info("Invites listed", count=len(invites))
            return invites
