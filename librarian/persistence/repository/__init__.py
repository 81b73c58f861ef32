"""SQL repository implementations."""

from librarian.persistence.repository.invite import SqlInviteRepository

__all__ = [
    "SqlInviteRepository",
]
