"""Models exchanged with remote media servers."""

from pydantic import Field

from librarian.domain.model.common import CamelModel, DomainModel
from librarian.domain.model.invite import (
    KomgaInviteOption,
    NavidromeInviteOption,
    SharedLibraries,
)


class RemoteUser(DomainModel):
    """User account that exists on a remote server."""

    id: str


class RemoteAdmin(DomainModel):
    """Account the client itself is authenticated as."""

    id: str
    is_admin: bool
    roles: list[str] = Field(default_factory=list)


class KomgaUserCreate(DomainModel):
    """Body of a Komga user creation request."""

    email: str
    password: str = Field(repr=False)
    roles: list[str]


class KomgaRestriction(CamelModel):
    """Content restrictions applied to a Komga user after creation."""

    labels_allow: set[str] | None = None
    labels_exclude: set[str] | None = None
    shared_libraries: SharedLibraries | None = None

    @classmethod
    def from_option(cls, option: KomgaInviteOption) -> "KomgaRestriction":
        """Build restrictions from invite options."""
        return cls(
            labels_allow=option.labels_allow,
            labels_exclude=option.labels_exclude,
            shared_libraries=option.shared_libraries,
        )


class NavidromeUserCreate(CamelModel):
    """Body of a Navidrome user creation request."""

    user_name: str
    name: str
    email: str
    password: str = Field(repr=False)
    is_admin: bool = False


class NavidromeLibraryAccess(CamelModel):
    """Libraries a Navidrome user may access."""

    library_ids: list[int] = Field(default_factory=list)

    @classmethod
    def from_option(cls, option: NavidromeInviteOption) -> "NavidromeLibraryAccess":
        """Build library access from invite options."""
        return cls(library_ids=list(option.library_ids))


class KomgaLibrary(DomainModel):
    """Library listed by Komga."""

    id: str
    name: str
    unavailable: bool = False


class NavidromeLibrary(DomainModel):
    """Library listed by Navidrome."""

    id: int
    name: str
