"""Get invite use case."""

from pydantic import BaseModel

from librarian.application.usecase.base import BaseUseCase
from librarian.application.usecase.invite.common import InviteItem
from librarian.domain.service import InviteService
from librarian.domain.value import TokenId


class GetInviteRequest(BaseModel):
    """Get invite request."""

    token: str  # Either textual token form


class GetInviteResponse(BaseModel):
    """Get invite response."""

    invite: InviteItem


class GetInviteUseCase(BaseUseCase):
    """Use case for looking up a live invite.

    Expired invites are deleted on lookup and reported as expired.
    """

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: GetInviteRequest) -> GetInviteResponse:
        """Execute get invite flow.

        Args:
            request: Token to look up

        Returns:
            The invite

        Raises:
            TokenIdError: If the token is malformed
            InviteNotFoundError: If the invite does not exist
            InviteExpiredError: If the invite has expired
        """
        token_id = TokenId.parse(request.token)
        invite = await self.invite_service.fetch(token_id)
        return GetInviteResponse(invite=InviteItem.from_invite(invite))
