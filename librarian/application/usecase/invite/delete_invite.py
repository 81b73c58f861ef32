"""Delete invite use case."""

from pydantic import BaseModel

from librarian.application.usecase.base import BaseUseCase
from librarian.domain.service import InviteService
from librarian.domain.value import TokenId


class DeleteInviteRequest(BaseModel):
    """Delete invite request."""

    token: str


class DeleteInviteResponse(BaseModel):
    """Delete invite response."""

    token: str  # Prefixed form of the deleted token


class DeleteInviteUseCase(BaseUseCase):
    """Use case for revoking an invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: DeleteInviteRequest) -> DeleteInviteResponse:
        """Execute delete invite flow.

        Deleting an unknown token succeeds.

        Raises:
            TokenIdError: If the token is malformed
        """
        token_id = TokenId.parse(request.token)
        await self.invite_service.delete_invite(token_id)
        return DeleteInviteResponse(token=str(token_id))
