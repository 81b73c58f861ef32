"""Mappers for converting between database rows and domain models.

Invite options are stored as a JSON document whose schema depends on the
``kind`` column, so rows are decoded variant by variant.
"""

from datetime import datetime, timezone
from typing import Any, Dict, assert_never

from pydantic import ValidationError

from librarian.domain.error import (
    CorruptInvitePayloadError,
    TokenIdError,
    UnknownInviteKindError,
)
from librarian.domain.model import (
    Invite,
    KomgaInvite,
    KomgaInviteOption,
    NavidromeInvite,
    NavidromeInviteOption,
)
from librarian.domain.value import InviteKind, TokenId


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model

    Raises:
        UnknownInviteKindError: If the kind column is not a known platform
        CorruptInvitePayloadError: If the token or option JSON does not parse
    """
    raw_token = row["token"]
    try:
        kind = InviteKind(str(row["kind"]).lower())
    except ValueError:
        raise UnknownInviteKindError(row["kind"]) from None

    try:
        token = TokenId.parse(raw_token)
    except TokenIdError as e:
        raise CorruptInvitePayloadError(raw_token, str(e)) from e

    created_at = row.get("created_at") or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        # SQLite drops the offset; timestamps are always written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    try:
        match kind:
            case InviteKind.KOMGA:
                return KomgaInvite(
                    token=token,
                    option=KomgaInviteOption.model_validate_json(row["option"]),
                    remote_user_id=row.get("uuid"),
                    created_at=created_at,
                )
            case InviteKind.NAVIDROME:
                return NavidromeInvite(
                    token=token,
                    option=NavidromeInviteOption.model_validate_json(row["option"]),
                    remote_user_id=row.get("uuid"),
                    created_at=created_at,
                )
            case _:
                assert_never(kind)
    except ValidationError as e:
        raise CorruptInvitePayloadError(raw_token, str(e)) from e


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "token": str(invite.token),
        "option": invite.option.model_dump_json(by_alias=True, exclude_none=True),
        "uuid": invite.remote_user_id,
        "kind": invite.kind,
        "created_at": invite.created_at,
    }
