"""Invite routes.

Every route requires the admin bearer token.
"""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Depends
from pydantic import RootModel

from librarian.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    DeleteInviteRequest,
    DeleteInviteResponse,
    DeleteInviteUseCase,
    GetInviteConfigResponse,
    GetInviteConfigUseCase,
    GetInviteRequest,
    GetInviteUseCase,
    GetServerInfoResponse,
    GetServerInfoUseCase,
    InviteItem,
    ListInvitesUseCase,
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
)
from librarian.interface.api.envelope import Envelope, ok
from librarian.interface.api.security import require_admin_token

router = APIRouter(
    prefix="/api/invite",
    tags=["invites"],
    route_class=DishkaRoute,
    dependencies=[Depends(require_admin_token)],
)


class CreateInviteAPIRequest(RootModel[CreateInviteRequest]):
    """Invite options tagged with ``kind``."""


@router.get("", response_model=Envelope[list[InviteItem]])
async def list_invites(
    list_invites_use_case: FromDishka[ListInvitesUseCase],
) -> Envelope[list[InviteItem]]:
    """List every invite, expired ones included."""
    response = await list_invites_use_case.execute()
    return ok(response.invites)


@router.post("", response_model=Envelope[InviteItem])
async def create_invite(
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
) -> Envelope[InviteItem]:
    """Create an invite for Komga or Navidrome."""
    response = await create_invite_use_case.execute(request.root)
    return ok(response.invite)


@router.get("/config", response_model=Envelope[GetInviteConfigResponse])
async def get_invite_config(
    get_invite_config_use_case: FromDishka[GetInviteConfigUseCase],
) -> Envelope[GetInviteConfigResponse]:
    """Labels and libraries that can be granted by an invite."""
    return ok(await get_invite_config_use_case.execute())


@router.get("/info", response_model=Envelope[GetServerInfoResponse])
async def get_info(
    get_server_info_use_case: FromDishka[GetServerInfoUseCase],
) -> Envelope[GetServerInfoResponse]:
    """Active media servers and the running version."""
    return ok(await get_server_info_use_case.execute())


@router.get("/{token}", response_model=Envelope[InviteItem])
async def get_invite(
    token: str,
    get_invite_use_case: FromDishka[GetInviteUseCase],
) -> Envelope[InviteItem]:
    """Look up an invite. Expired invites are deleted and reported as 403."""
    response = await get_invite_use_case.execute(GetInviteRequest(token=token))
    return ok(response.invite)


@router.delete("/{token}", response_model=Envelope[DeleteInviteResponse])
async def delete_invite(
    token: str,
    delete_invite_use_case: FromDishka[DeleteInviteUseCase],
) -> Envelope[DeleteInviteResponse]:
    """Revoke an invite."""
    return ok(await delete_invite_use_case.execute(DeleteInviteRequest(token=token)))


@router.post("/{token}/apply", response_model=Envelope[RedeemInviteResponse])
async def apply_invite(
    token: str,
    redeem_invite_use_case: FromDishka[RedeemInviteUseCase],
    credentials: dict[str, Any] = Body(...),
) -> Envelope[RedeemInviteResponse]:
    """Redeem an invite with ``{"kind", "email", "password", "username"?}``.

    Returns the host the new account lives on.
    """
    request = RedeemInviteRequest(token=token, credentials=credentials)
    return ok(await redeem_invite_use_case.execute(request))
