"""Authentication routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from librarian.config import Settings
from librarian.interface.api.envelope import Envelope, ok
from librarian.interface.api.security import token_matches

router = APIRouter(prefix="/api/auth", tags=["authentication"], route_class=DishkaRoute)


class LoginRequest(BaseModel):
    """Admin login request."""

    token: str


@router.post("/login", response_model=Envelope[None])
async def login(request: LoginRequest, settings: FromDishka[Settings]) -> Envelope[None]:
    """Check the admin token.

    The admin panel stores the token and sends it as a bearer token on
    every invite route.

    Raises:
        HTTPException: 401 if the token is wrong
    """
    if not token_matches(request.token, settings.token):
        logfire.warn("Admin login rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )
    return ok()
