"""Domain model entities for K-Librarian."""

from librarian.domain.model.credentials import (
    Credentials,
    KomgaCredentials,
    NavidromeCredentials,
    parse_credentials,
)
from librarian.domain.model.invite import (
    Invite,
    InviteVariantOption,
    KomgaInvite,
    KomgaInviteOption,
    NavidromeInvite,
    NavidromeInviteOption,
    SharedLibraries,
    invite_adapter,
    invite_kind,
)
from librarian.domain.model.remote import (
    KomgaLibrary,
    KomgaRestriction,
    KomgaUserCreate,
    NavidromeLibrary,
    NavidromeLibraryAccess,
    NavidromeUserCreate,
    RemoteAdmin,
    RemoteUser,
)

__all__ = [
    "Credentials",
    "Invite",
    "InviteVariantOption",
    "KomgaCredentials",
    "KomgaInvite",
    "KomgaInviteOption",
    "KomgaLibrary",
    "KomgaRestriction",
    "KomgaUserCreate",
    "NavidromeCredentials",
    "NavidromeInvite",
    "NavidromeInviteOption",
    "NavidromeLibrary",
    "NavidromeLibraryAccess",
    "NavidromeUserCreate",
    "RemoteAdmin",
    "RemoteUser",
    "SharedLibraries",
    "invite_adapter",
    "invite_kind",
    "parse_credentials",
]
