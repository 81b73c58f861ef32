"""Repository interfaces for K-Librarian domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from librarian.domain.repository.invite import InviteRepository

__all__ = [
    "InviteRepository",
]
