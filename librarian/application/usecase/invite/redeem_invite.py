"""Redeem invite use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from librarian.application.usecase.base import BaseUseCase
from librarian.domain.model import (
    KomgaCredentials,
    NavidromeCredentials,
    parse_credentials,
)
from librarian.domain.service import RedemptionService
from librarian.domain.value import TokenId


class RedeemInviteRequest(BaseModel):
    """Redeem invite request.

    Credentials are kept raw so every validation problem is reported
    together by the domain model. ``kind`` may be left out, in which case
    the invite's own platform decides how they are validated.
    """

    token: str
    credentials: dict[str, Any]


class RedeemInviteResponse(BaseModel):
    """Redeem invite response."""

    host: str  # Where the new user should log in


class RedeemInviteUseCase(BaseUseCase):
    """Use case for creating a remote account from an invite."""

    def __init__(self, redemption_service: RedemptionService) -> None:
        """Initialize use case.

        Args:
            redemption_service: Redemption domain service
        """
        self.redemption_service = redemption_service

    async def execute(self, request: RedeemInviteRequest) -> RedeemInviteResponse:
        """Execute redeem invite flow.

        Args:
            request: Token and raw credentials

        Returns:
            Public host of the platform the account was created on

        Raises:
            TokenIdError: If the token is malformed
            InvalidCredentialsError: If the credentials fail validation
        """
        token_id = TokenId.parse(request.token)
        credentials: KomgaCredentials | NavidromeCredentials | dict[str, Any]
        if "kind" in request.credentials:
            credentials = parse_credentials(request.credentials)
        else:
            credentials = request.credentials

        with logfire.span("redeem_invite", token=str(token_id)):
            host = await self.redemption_service.redeem(token_id, credentials)
            return RedeemInviteResponse(host=host)
