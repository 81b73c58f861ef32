"""Remote media server client interfaces.

The domain only talks to media servers through these interfaces;
HTTP implementations live in the adapter layer.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from librarian.domain.model import (
    KomgaLibrary,
    KomgaRestriction,
    KomgaUserCreate,
    NavidromeLibrary,
    NavidromeLibraryAccess,
    NavidromeUserCreate,
    RemoteAdmin,
    RemoteUser,
)
from librarian.domain.value import InviteKind

UserCreateT = TypeVar("UserCreateT")
RestrictionT = TypeVar("RestrictionT")
LibraryT = TypeVar("LibraryT")


class RemotePlatformClient(ABC, Generic[UserCreateT, RestrictionT, LibraryT]):
    """Generic client for a media server.

    Every method raises a RemotePlatformError subclass on failure and
    never retries.

    Attributes:
        platform: Platform this client talks to
        public_host: Host new users are sent to after signing up
    """

    platform: ClassVar[InviteKind]
    public_host: str

    @abstractmethod
    async def create_remote_user(self, user: UserCreateT) -> RemoteUser:
        """Create a user account.

        Args:
            user: Account details

        Returns:
            The created remote user
        """
        pass

    @abstractmethod
    async def apply_remote_restrictions(
        self, remote_user_id: str, restriction: RestrictionT
    ) -> None:
        """Apply content restrictions to an existing user.

        Args:
            remote_user_id: Id of the remote user
            restriction: Restrictions to apply
        """
        pass

    @abstractmethod
    async def get_current_admin(self) -> RemoteAdmin:
        """Get the account this client is authenticated as.

        Used at start-up to check the account may create users.
        """
        pass

    @abstractmethod
    async def list_libraries(self) -> list[LibraryT]:
        """List the libraries an invite can grant access to."""
        pass


class KomgaClient(
    RemotePlatformClient[KomgaUserCreate, KomgaRestriction, KomgaLibrary]
):
    """Base class for Komga clients.

    Provides type distinction for dependency injection.
    """

    platform = InviteKind.KOMGA

    @abstractmethod
    async def list_sharing_labels(self) -> list[str]:
        """List the sharing labels defined on the server."""
        pass


class NavidromeClient(
    RemotePlatformClient[
        NavidromeUserCreate, NavidromeLibraryAccess, NavidromeLibrary
    ]
):
    """Base class for Navidrome clients.

    Provides type distinction for dependency injection.
    """

    platform = InviteKind.NAVIDROME

