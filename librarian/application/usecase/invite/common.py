"""Response models shared by invite use cases."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from librarian.domain.model import Invite
from librarian.domain.value import InviteKind


class InviteItem(BaseModel):
    """Invite as returned to API clients.

    ``option`` uses camelCase keys and ``uuid`` holds the remote user id.
    """

    kind: InviteKind
    token: str
    option: dict[str, Any]
    uuid: str | None = None
    created_at: datetime

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteItem":
        """Build a response item from an invite."""
        return cls(
            kind=InviteKind(invite.kind),
            token=str(invite.token),
            option=invite.option.model_dump(mode="json", by_alias=True),
            uuid=invite.remote_user_id,
            created_at=invite.created_at,
        )
