"""Navidrome API client implementation.

Navidrome authenticates with a JWT obtained from ``/auth/login``. The
token is sent in the ``x-nd-authorization`` header and the server may
hand back a refreshed one in the same response header.
"""

import asyncio
from typing import Optional

import httpx
import jwt
import logfire
from pydantic import TypeAdapter, ValidationError

from librarian.adapter.http import (
    REQUEST_TIMEOUT,
    USER_AGENT,
    decode_json,
    extract_violations,
    raise_for_error,
    validate_response,
)
from librarian.domain.error import (
    RemoteAuthenticationError,
    RemoteConnectionError,
    RemoteResponseError,
    RemoteViolationError,
    RestrictionApplicationError,
)
from librarian.domain.model import (
    NavidromeLibrary,
    NavidromeLibraryAccess,
    NavidromeUserCreate,
    RemoteAdmin,
    RemoteUser,
)
from librarian.domain.model.common import DomainModel
from librarian.domain.service.platform import NavidromeClient

PLATFORM = "navidrome"
AUTH_HEADER = "x-nd-authorization"

_libraries_adapter = TypeAdapter(list[NavidromeLibrary])


class NavidromeClaims(DomainModel):
    """Claims of a Navidrome session token that the client relies on."""

    adm: bool = False
    uid: str
    sub: str = ""


def decode_claims(token: str) -> NavidromeClaims:
    """Read the claims of a Navidrome JWT.

    The signature is not verified; the token came straight from the
    server over the connection it was requested on.

    Raises:
        RemoteAuthenticationError: If the token or its claims are malformed
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
        return NavidromeClaims.model_validate(payload)
    except jwt.InvalidTokenError as e:
        raise RemoteAuthenticationError(PLATFORM, f"invalid JWT: {e}") from e
    except ValidationError as e:
        raise RemoteAuthenticationError(PLATFORM, f"invalid JWT claims: {e}") from e


def strip_bearer(value: str) -> str:
    """Drop a leading ``Bearer`` scheme from a header value."""
    if value[:7].lower() == "bearer ":
        return value[7:].strip()
    return value.strip()


class HttpNavidromeClient(NavidromeClient):
    """Navidrome client over HTTP.

    Holds the current session token. Every request, including the first
    login, runs under one lock so a rotated token is never overwritten by
    a concurrent request that used an older one.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        public_host: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize Navidrome client.

        Args:
            host: Base URL of the Navidrome server
            username: Admin username
            password: Admin password
            public_host: Host shown to new users (defaults to host)
            transport: Custom httpx transport, used by tests
        """
        self.host = host.rstrip("/")
        self.public_host = public_host or host
        self.username = username
        self._password = password
        self._transport = transport
        self._token: Optional[str] = None
        self._claims: Optional[NavidromeClaims] = None
        self._lock = asyncio.Lock()

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.host,
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT,
            transport=self._transport,
        )

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logfire.error(
                "Navidrome request failed", method=method, path=path, error=str(e)
            )
            raise RemoteConnectionError(PLATFORM, e) from e

    async def _login(self) -> NavidromeClaims:
        """Log in and cache the session token. Caller holds the lock."""
        with logfire.span("navidrome.login", username=self.username):
            response = await self._send(
                "POST",
                "/auth/login",
                json={"username": self.username, "password": self._password},
            )
            if not response.is_success:
                logfire.error(
                    "Navidrome login failed", status_code=response.status_code
                )
                raise RemoteAuthenticationError(
                    PLATFORM, f"login returned status {response.status_code}"
                )

            body = decode_json(PLATFORM, response)
            if not isinstance(body, dict) or not body.get("token"):
                raise RemoteAuthenticationError(PLATFORM, "login response has no token")

            token = str(body["token"])
            claims = decode_claims(token)
            self._token = token
            self._claims = claims
            return claims

    async def _ensure_login(self) -> NavidromeClaims:
        """Return cached claims, logging in first if needed. Caller holds the lock."""
        if self._token is None or self._claims is None:
            return await self._login()
        return self._claims

    async def _authorized(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send an authenticated request and keep the rotated token."""
        async with self._lock:
            await self._ensure_login()
            response = await self._send(
                method,
                path,
                headers={AUTH_HEADER: f"Bearer {self._token}"},
                **kwargs,
            )

            rotated = response.headers.get(AUTH_HEADER)
            if rotated:
                self._token = strip_bearer(rotated)
            elif response.status_code == 401:
                # Session expired; the next call logs in again
                self._token = None
                self._claims = None
            return response

    async def create_remote_user(self, user: NavidromeUserCreate) -> RemoteUser:
        """Create a Navidrome user.

        Args:
            user: Username, display name, email, password and admin flag

        Returns:
            Created user

        Raises:
            RemotePlatformError: If Navidrome rejects the request
        """
        with logfire.span(
            "navidrome.create_user", username=user.user_name, is_admin=user.is_admin
        ):
            response = await self._authorized(
                "POST", "/api/user", json=user.model_dump(mode="json", by_alias=True)
            )
            if not response.is_success:
                logfire.warn(
                    "Navidrome rejected user creation",
                    status_code=response.status_code,
                    body=response.text,
                )
            raise_for_error(PLATFORM, response)
            body = decode_json(PLATFORM, response)
            if not isinstance(body, dict) or "id" not in body:
                raise RemoteResponseError(PLATFORM, "user response has no id")
            return RemoteUser(id=str(body["id"]))

    async def apply_remote_restrictions(
        self, remote_user_id: str, restriction: NavidromeLibraryAccess
    ) -> None:
        """Set the libraries a Navidrome user can access.

        Args:
            remote_user_id: Navidrome user id
            restriction: Library ids to grant

        Raises:
            RemoteViolationError: If Navidrome reports invalid fields
            RestrictionApplicationError: For any other failure
        """
        with logfire.span(
            "navidrome.apply_libraries",
            remote_user_id=remote_user_id,
            library_ids=restriction.library_ids,
        ):
            response = await self._authorized(
                "PUT",
                f"/api/user/{remote_user_id}/library",
                json=restriction.model_dump(mode="json", by_alias=True),
            )
            if response.is_success:
                return

            logfire.warn(
                "Navidrome rejected library access",
                remote_user_id=remote_user_id,
                status_code=response.status_code,
            )
            violations = extract_violations(response)
            if violations:
                raise RemoteViolationError(PLATFORM, violations)
            raise RestrictionApplicationError(PLATFORM, response.status_code)

    async def get_current_admin(self) -> RemoteAdmin:
        """Get the authenticated account from the session token claims."""
        async with self._lock:
            claims = await self._ensure_login()
        return RemoteAdmin(
            id=claims.uid,
            is_admin=claims.adm,
            roles=["admin"] if claims.adm else [],
        )

    async def list_libraries(self) -> list[NavidromeLibrary]:
        """List Navidrome libraries, ordered by id."""
        response = await self._authorized(
            "GET",
            "/api/library",
            params={"_start": 0, "_end": -1, "_sort": "id", "_order": "asc"},
        )
        raise_for_error(PLATFORM, response)
        return validate_response(PLATFORM, response, _libraries_adapter)


class MockNavidromeClient(NavidromeClient):
    """Mock Navidrome client for testing.

    Returns deterministic data and records every call without making real
    API requests.

    Attributes:
        created_users: Users passed to create_remote_user
        applied_restrictions: (user id, library access) pairs that were applied
        restriction_error: Raised by apply_remote_restrictions when set
    """

    def __init__(self, public_host: str = "https://navidrome.test") -> None:
        self.public_host = public_host
        self.created_users: list[NavidromeUserCreate] = []
        self.applied_restrictions: list[tuple[str, NavidromeLibraryAccess]] = []
        self.restriction_error: Optional[Exception] = None
        self.libraries = [
            NavidromeLibrary(id=1, name="Music"),
            NavidromeLibrary(id=2, name="Podcasts"),
        ]

    async def create_remote_user(self, user: NavidromeUserCreate) -> RemoteUser:
        """Record the user and return a sequential id."""
        self.created_users.append(user)
        return RemoteUser(id=f"navidrome-user-{len(self.created_users)}")

    async def apply_remote_restrictions(
        self, remote_user_id: str, restriction: NavidromeLibraryAccess
    ) -> None:
        """Record the library access, or raise restriction_error if set."""
        if self.restriction_error is not None:
            raise self.restriction_error
        self.applied_restrictions.append((remote_user_id, restriction))

    async def get_current_admin(self) -> RemoteAdmin:
        """Return a mock admin account."""
        return RemoteAdmin(id="navidrome-admin", is_admin=True, roles=["admin"])

    async def list_libraries(self) -> list[NavidromeLibrary]:
        """Return mock libraries."""
        return list(self.libraries)
