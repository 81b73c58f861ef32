"""Domain value types for K-Librarian."""

from enum import Enum


class InviteKind(str, Enum):
    """Media server an invite grants access to."""

    KOMGA = "komga"
    NAVIDROME = "navidrome"


# Roles granted to self-service Komga signups when the invite sets none
KOMGA_DEFAULT_ROLES: tuple[str, ...] = ("USER", "FILE_DOWNLOAD", "PAGE_STREAMING")
