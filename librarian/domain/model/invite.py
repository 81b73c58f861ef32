"""Invite entity.

An invite lets someone create their own account on one media server.
Each invite is exactly one of two variants, selected by ``kind``:

- ``komga``: label and library scoping plus an optional role list
- ``navidrome``: admin flag and a list of library ids

Business rules:
- Invites may expire (``expiresAt``, epoch seconds); expiry is checked
  when the invite is read, not by a background job
- ``remote_user_id`` stays empty until the remote account exists; once set
  it marks the point a failed redemption resumes from
- Redeemed invites are deleted
"""

import time
from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import ConfigDict, Field, NonNegativeInt, TypeAdapter

from librarian.domain.model.common import CamelModel, DomainModel
from librarian.domain.value import InviteKind, TokenId


class InviteOption(CamelModel):
    """Options common to every invite variant."""

    expires_at: NonNegativeInt | None = None

    def is_expired(self, now: float | None = None) -> bool:
        """Check whether the expiry time has passed.

        Args:
            now: Current epoch seconds (defaults to the wall clock)

        Returns:
            True if an expiry is set and lies in the past
        """
        if self.expires_at is None:
            return False
        current = time.time() if now is None else now
        return current > self.expires_at


class SharedLibraries(CamelModel):
    """Komga library sharing grant."""

    all: bool = False
    library_ids: set[str] = Field(default_factory=set)


class KomgaInviteOption(InviteOption):
    """Komga invite options.

    Absent fields leave the corresponding Komga default untouched.
    """

    labels_allow: set[str] | None = None
    labels_exclude: set[str] | None = None
    shared_libraries: SharedLibraries | None = None
    roles: list[str] | None = None


class NavidromeInviteOption(InviteOption):
    """Navidrome invite options."""

    is_admin: bool = False
    library_ids: list[NonNegativeInt] = Field(default_factory=list)


class InviteBase(DomainModel):
    """Fields shared by every invite variant."""

    token: TokenId
    # Serialized as "uuid" for compatibility with existing clients
    remote_user_id: str | None = Field(default=None, alias="uuid")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    # Narrowed to the platform specific options by each variant
    option: InviteOption

    model_config = ConfigDict(populate_by_name=True)

    def is_expired(self, now: float | None = None) -> bool:
        """Check whether this invite has expired."""
        return self.option.is_expired(now)


class KomgaInvite(InviteBase):
    """Invite granting a Komga account."""

    kind: Literal["komga"] = "komga"
    option: KomgaInviteOption


class NavidromeInvite(InviteBase):
    """Invite granting a Navidrome account."""

    kind: Literal["navidrome"] = "navidrome"
    option: NavidromeInviteOption


Invite = Annotated[Union[KomgaInvite, NavidromeInvite], Field(discriminator="kind")]
InviteVariantOption = KomgaInviteOption | NavidromeInviteOption

invite_adapter: TypeAdapter[Invite] = TypeAdapter(Invite)


def invite_kind(invite: KomgaInvite | NavidromeInvite) -> InviteKind:
    """Platform an invite belongs to."""
    return InviteKind(invite.kind)
