"""Invite token identifier.

A token wraps a random UUID and has two textual forms:

- canonical: ``f81d4fae-7dec-11d0-a765-00a0c91e6bf6``
- prefixed:  ``kli_f81d4fae7dec11d0a76500a0c91e6bf6``

Both parse to the same value. The prefixed form is the one handed out to
clients and written to the store.
"""

import re
from typing import Any, ClassVar
from uuid import UUID, uuid4

from pydantic import field_serializer, field_validator

from librarian.domain.error import (
    IncompleteTokenError,
    InvalidTokenFormatError,
    InvalidTokenValueError,
)
from librarian.domain.value.common import RootValueObject

TOKEN_PREFIX = "kli_"

# Hex digits per hyphen-separated group of a canonical UUID
_GROUP_SIZES = (8, 4, 4, 4, 12)

_CANONICAL_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


class TokenId(RootValueObject[UUID]):
    """Identifier of an invite token.

    Equality and hashing only look at the wrapped UUID, so a token parsed
    from the canonical form equals the same token parsed from the prefixed
    form.
    """

    prefix: ClassVar[str] = TOKEN_PREFIX

    @field_validator("root", mode="before")
    @classmethod
    def decode_text(cls, v: Any) -> Any:
        """Accept either textual form wherever a TokenId is validated."""
        if isinstance(v, str):
            return decode_token(v)
        return v

    @field_serializer("root")
    def serialize_root(self, value: UUID) -> str:
        """Serialize as the prefixed form."""
        return TOKEN_PREFIX + value.hex

    @classmethod
    def generate(cls) -> "TokenId":
        """Mint a new random token."""
        return cls(uuid4())

    @classmethod
    def parse(cls, text: str) -> "TokenId":
        """Parse a token from either textual form.

        Args:
            text: Canonical UUID or ``kli_`` prefixed token

        Returns:
            Parsed token

        Raises:
            InvalidTokenFormatError: Unprefixed text is not a canonical UUID
            IncompleteTokenError: Prefixed text is shorter than 32 hex digits
            InvalidTokenValueError: Prefixed text is not valid hex
        """
        return cls(decode_token(text))

    @property
    def canonical(self) -> str:
        """Hyphenated UUID form, as written by older releases."""
        return str(self.root)

    def to_display_string(self) -> str:
        """Prefixed compact form."""
        return TOKEN_PREFIX + self.root.hex

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return f"TokenId({self.to_display_string()!r})"

    def __hash__(self) -> int:
        return hash(self.root)


def decode_token(text: str) -> UUID:
    """Decode token text into its UUID.

    Prefixed text gets its hyphens re-inserted at the 8-4-4-4-12 offsets
    before being validated as a UUID.
    """
    if not text.startswith(TOKEN_PREFIX):
        if not _CANONICAL_RE.fullmatch(text):
            raise InvalidTokenFormatError(text)
        try:
            return UUID(text)
        except ValueError:
            raise InvalidTokenFormatError(text) from None

    digits = text[len(TOKEN_PREFIX) :]
    groups: list[str] = []
    offset = 0
    for index, size in enumerate(_GROUP_SIZES):
        # The last group swallows any trailing characters so they fail below
        last = index == len(_GROUP_SIZES) - 1
        group = digits[offset:] if last else digits[offset : offset + size]
        if len(group) < size:
            raise IncompleteTokenError(index)
        groups.append(group)
        offset += size

    if not all(_HEX_RE.fullmatch(group) for group in groups):
        raise InvalidTokenValueError(text)
    try:
        return UUID("-".join(groups))
    except ValueError:
        # Trailing digits make the last group too long
        raise InvalidTokenValueError(text) from None
