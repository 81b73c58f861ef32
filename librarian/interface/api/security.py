"""Admin bearer token check."""

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from librarian.config import Settings

bearer_scheme = HTTPBearer(auto_error=False)


def token_matches(candidate: str, expected: str) -> bool:
    """Compare tokens in constant time."""
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


async def require_admin_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    """Reject requests without ``Authorization: Bearer <admin token>``.

    Raises:
        HTTPException: 401 if the header is missing or the token is wrong
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized access. Expected 'Bearer <token>'",
        )

    settings = await request.state.dishka_container.get(Settings)
    if not token_matches(credentials.credentials, settings.token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )
