"""Invite repository interface."""

from abc import ABC, abstractmethod

from librarian.domain.model import Invite
from librarian.domain.value import TokenId


class InviteRepository(ABC):
    """Repository for pending invites.

    Defines the contract for invite persistence operations.
    Implementations live in the persistence layer.

    Lookups match a token regardless of whether the row was written with
    the prefixed or the canonical token text.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backing storage if it does not exist yet.

        Safe to call on every start.
        """
        pass

    @abstractmethod
    async def insert(self, invite: Invite) -> Invite:
        """Store a new invite.

        Args:
            invite: The invite to store

        Returns:
            The stored invite

        Raises:
            InviteConflictError: If the token already exists
            StoreError: If the storage backend fails
        """
        pass

    @abstractmethod
    async def get(self, token_id: TokenId) -> Invite | None:
        """Find an invite by token.

        Args:
            token_id: The invite token

        Returns:
            The invite if found, None otherwise

        Raises:
            UnknownInviteKindError: If the stored kind is not recognised
            CorruptInvitePayloadError: If the stored options do not parse
        """
        pass

    @abstractmethod
    async def delete(self, token_id: TokenId) -> None:
        """Delete an invite. Deleting a missing token is not an error.

        Args:
            token_id: The invite token
        """
        pass

    @abstractmethod
    async def set_remote_user_id(self, token_id: TokenId, user_id: str) -> None:
        """Record the remote account created for an invite.

        Only the remote user id changes; options and kind are left as is.

        Args:
            token_id: The invite token
            user_id: Id of the account on the remote server
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Invite]:
        """List every stored invite, in no particular order.

        Returns:
            List of invites
        """
        pass
