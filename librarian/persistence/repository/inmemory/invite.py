"""In-memory invite repository for testing."""

from typing import Optional
from uuid import UUID

from librarian.domain.error import InviteConflictError
from librarian.domain.model import Invite
from librarian.domain.repository import InviteRepository
from librarian.domain.value import TokenId


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: dict[UUID, Invite] = {}

    async def initialize(self) -> None:
        """Nothing to create."""
        pass

    async def insert(self, invite: Invite) -> Invite:
        """Store a new invite."""
        if invite.token.root in self._invites:
            raise InviteConflictError(str(invite.token))
        self._invites[invite.token.root] = invite
        return invite

    async def get(self, token_id: TokenId) -> Optional[Invite]:
        """Find an invite by token."""
        return self._invites.get(token_id.root)

    async def delete(self, token_id: TokenId) -> None:
        """Delete an invite, if present."""
        self._invites.pop(token_id.root, None)

    async def set_remote_user_id(self, token_id: TokenId, user_id: str) -> None:
        """Record the remote user id of an invite."""
        invite = self._invites.get(token_id.root)
        if invite is not None:
            self._invites[token_id.root] = invite.model_copy(
                update={"remote_user_id": user_id}
            )

    async def list_all(self) -> list[Invite]:
        """List every invite."""
        return list(self._invites.values())
