"""Credentials a redeemer supplies to claim an invite."""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import EmailStr, Field, TypeAdapter, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from librarian.domain.error import InvalidCredentialsError
from librarian.domain.model.common import DomainModel

PASSWORD_MIN_LENGTH = 6


class KomgaCredentials(DomainModel):
    """Credentials for a Komga account. Komga logs in by email."""

    kind: Literal["komga"] = "komga"
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, repr=False)


class NavidromeCredentials(DomainModel):
    """Credentials for a Navidrome account."""

    kind: Literal["navidrome"] = "navidrome"
    username: str
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, repr=False)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Usernames are alphanumeric with dashes and underscores."""
        trimmed = v.strip()
        if not trimmed:
            raise PydanticCustomError("username", "Username cannot be empty")
        if not all(c.isalnum() or c in "-_" for c in trimmed):
            raise PydanticCustomError(
                "username",
                "Username can only contain alphanumeric characters, dashes, "
                "and underscores",
            )
        return trimmed


Credentials = Annotated[
    Union[KomgaCredentials, NavidromeCredentials], Field(discriminator="kind")
]

_credentials_adapter: TypeAdapter[Credentials] = TypeAdapter(Credentials)


def parse_credentials(
    data: Mapping[str, Any], default_kind: str | None = None
) -> KomgaCredentials | NavidromeCredentials:
    """Validate raw credentials.

    Every violation is collected before failing so callers can show them
    all at once.

    Args:
        data: Raw payload, usually including the ``kind`` discriminator
        default_kind: Kind to validate against when the payload has none

    Returns:
        Validated credentials for the requested platform

    Raises:
        InvalidCredentialsError: If any field is invalid
    """
    try:
        payload = dict(data)
        if default_kind is not None:
            payload.setdefault("kind", default_kind)
        return _credentials_adapter.validate_python(payload)
    except ValidationError as e:
        raise InvalidCredentialsError(collect_violations(e)) from e


def collect_violations(error: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by field name.

    The first location element of a discriminated union is the tag, so it
    is dropped when more elements follow.
    """
    violations: dict[str, list[str]] = {}
    for item in error.errors():
        loc = [str(part) for part in item["loc"]]
        if len(loc) > 1:
            loc = loc[1:]
        field = ".".join(loc) or "kind"
        violations.setdefault(field, []).append(item["msg"])
    return violations
