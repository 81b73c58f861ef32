"""Test configuration and fixtures."""

import time

from librarian.domain.model import (
    KomgaInvite,
    KomgaInviteOption,
    NavidromeInvite,
    NavidromeInviteOption,
)
from librarian.domain.value import TokenId


def make_komga_invite(
    expires_in: int | None = None, remote_user_id: str | None = None, **option
) -> KomgaInvite:
    """Build a Komga invite for tests.

    Args:
        expires_in: Seconds from now until expiry; negative for already expired
        remote_user_id: Checkpointed remote user id
        option: Extra Komga option fields

    Returns:
        Komga invite with a fresh token
    """
    if expires_in is not None:
        option["expires_at"] = int(time.time()) + expires_in
    return KomgaInvite(
        token=TokenId.generate(),
        option=KomgaInviteOption(**option),
        remote_user_id=remote_user_id,
    )


def make_navidrome_invite(
    expires_in: int | None = None, remote_user_id: str | None = None, **option
) -> NavidromeInvite:
    """Build a Navidrome invite for tests."""
    if expires_in is not None:
        option["expires_at"] = int(time.time()) + expires_in
    return NavidromeInvite(
        token=TokenId.generate(),
        option=NavidromeInviteOption(**option),
        remote_user_id=remote_user_id,
    )
