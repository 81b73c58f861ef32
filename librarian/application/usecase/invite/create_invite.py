"""Create invite use case."""

from typing import Annotated, Literal, Union

import logfire
from pydantic import BaseModel, Field

from librarian.application.usecase.base import BaseUseCase
from librarian.application.usecase.invite.common import InviteItem
from librarian.domain.model import (
    InviteVariantOption,
    KomgaInviteOption,
    NavidromeInviteOption,
)
from librarian.domain.service import InviteService


class CreateKomgaInviteRequest(KomgaInviteOption):
    """Request to create a Komga invite; the options sit next to ``kind``."""

    kind: Literal["komga"] = "komga"

    def to_option(self) -> KomgaInviteOption:
        return KomgaInviteOption.model_validate(self.model_dump(exclude={"kind"}))


class CreateNavidromeInviteRequest(NavidromeInviteOption):
    """Request to create a Navidrome invite; the options sit next to ``kind``."""

    kind: Literal["navidrome"] = "navidrome"

    def to_option(self) -> NavidromeInviteOption:
        return NavidromeInviteOption.model_validate(self.model_dump(exclude={"kind"}))


CreateInviteRequest = Annotated[
    Union[CreateKomgaInviteRequest, CreateNavidromeInviteRequest],
    Field(discriminator="kind"),
]


class CreateInviteResponse(BaseModel):
    """Response after creating an invite."""

    invite: InviteItem


class CreateInviteUseCase(BaseUseCase):
    """Use case for creating an invite."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(
        self, request: CreateKomgaInviteRequest | CreateNavidromeInviteRequest
    ) -> CreateInviteResponse:
        """Execute create invite use case.

        Args:
            request: Invite kind and options

        Returns:
            The created invite
        """
        with logfire.span("create_invite", kind=request.kind):
            option: InviteVariantOption = request.to_option()
            invite = await self.invite_service.create_invite(option)
            return CreateInviteResponse(invite=InviteItem.from_invite(invite))
