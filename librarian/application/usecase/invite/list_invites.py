"""List invites use case."""

from pydantic import BaseModel

from librarian.application.usecase.base import BaseUseCase
from librarian.application.usecase.invite.common import InviteItem
from librarian.domain.service import InviteService


class ListInvitesResponse(BaseModel):
    """List invites response."""

    invites: list[InviteItem]
    total: int


class ListInvitesUseCase(BaseUseCase):
    """Use case for listing every stored invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: None = None) -> ListInvitesResponse:
        """Execute list invites flow.

        Expired invites are included; they are purged when looked up.
        """
        invites = await self.invite_service.list_invites()
        items = [InviteItem.from_invite(invite) for invite in invites]
        return ListInvitesResponse(invites=items, total=len(items))
