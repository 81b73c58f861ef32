"""Domain value objects for K-Librarian."""

from librarian.domain.value.identifiers import TOKEN_PREFIX, TokenId
from librarian.domain.value.types import KOMGA_DEFAULT_ROLES, InviteKind

__all__ = [
    # Identifiers
    "TOKEN_PREFIX",
    "TokenId",
    # Types
    "InviteKind",
    "KOMGA_DEFAULT_ROLES",
]
