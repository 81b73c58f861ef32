"""Komga API client implementation.

Talks to the Komga REST API with HTTP basic authentication.
"""

from typing import Optional

import httpx
import logfire
from pydantic import TypeAdapter

from librarian.adapter.http import (
    REQUEST_TIMEOUT,
    USER_AGENT,
    decode_json,
    extract_violations,
    raise_for_error,
    validate_response,
)
from librarian.domain.error import (
    RemoteConnectionError,
    RemoteResponseError,
    RemoteViolationError,
    RestrictionApplicationError,
)
from librarian.domain.model import (
    KomgaLibrary,
    KomgaRestriction,
    KomgaUserCreate,
    RemoteAdmin,
    RemoteUser,
)
from librarian.domain.service.platform import KomgaClient

PLATFORM = "komga"

_libraries_adapter = TypeAdapter(list[KomgaLibrary])
_labels_adapter = TypeAdapter(list[str])


class HttpKomgaClient(KomgaClient):
    """Komga client over HTTP.

    Stateless: every call opens its own connection and authenticates with
    the configured username and password.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        public_host: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize Komga client.

        Args:
            host: Base URL of the Komga server
            username: Admin account email
            password: Admin account password
            public_host: Host shown to new users (defaults to host)
            transport: Custom httpx transport, used by tests
        """
        self.host = host.rstrip("/")
        self.public_host = public_host or host
        self._auth = (username, password)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.host,
            auth=self._auth,
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
                "Komga request failed", method=method, path=path, error=str(e)
            )
            raise RemoteConnectionError(PLATFORM, e) from e

    async def create_remote_user(self, user: KomgaUserCreate) -> RemoteUser:
        """Create a Komga user.

        Args:
            user: Email, password and roles of the new user

        Returns:
            Created user

        Raises:
            RemotePlatformError: If Komga rejects the request
        """
        with logfire.span("komga.create_user", email=user.email, roles=user.roles):
            response = await self._send(
                "POST", "/api/v2/users", json=user.model_dump(mode="json")
            )
            if not response.is_success:
                logfire.warn(
                    "Komga rejected user creation",
                    status_code=response.status_code,
                    body=response.text,
                )
            raise_for_error(PLATFORM, response)
            body = decode_json(PLATFORM, response)
            if not isinstance(body, dict) or "id" not in body:
                raise RemoteResponseError(PLATFORM, "user response has no id")
            return RemoteUser(id=str(body["id"]))

    async def apply_remote_restrictions(
        self, remote_user_id: str, restriction: KomgaRestriction
    ) -> None:
        """Update labels and shared libraries of a Komga user.

        Fields left unset in the restriction are not sent, so Komga keeps
        its current value for them.

        Args:
            remote_user_id: Komga user id
            restriction: Restrictions to apply

        Raises:
            RemoteViolationError: If Komga reports invalid fields
            RestrictionApplicationError: For any other failure
        """
        with logfire.span("komga.apply_restrictions", remote_user_id=remote_user_id):
            response = await self._send(
                "PATCH",
                f"/api/v2/users/{remote_user_id}",
                json=restriction.model_dump(
                    mode="json", by_alias=True, exclude_none=True
                ),
            )
            if response.is_success:
                return

            logfire.warn(
                "Komga rejected user restrictions",
                remote_user_id=remote_user_id,
                status_code=response.status_code,
            )
            violations = extract_violations(response)
            if violations:
                raise RemoteViolationError(PLATFORM, violations)
            raise RestrictionApplicationError(PLATFORM, response.status_code)

    async def get_current_admin(self) -> RemoteAdmin:
        """Get the authenticated Komga account.

        Returns:
            Account id and roles; it is an admin if it holds ``ADMIN``
        """
        response = await self._send("GET", "/api/v2/users/me")
        raise_for_error(PLATFORM, response)
        body = decode_json(PLATFORM, response)
        if not isinstance(body, dict) or "id" not in body:
            raise RemoteResponseError(PLATFORM, "user response has no id")
        roles = [str(role) for role in body.get("roles", [])]
        return RemoteAdmin(id=str(body["id"]), is_admin="ADMIN" in roles, roles=roles)

    async def list_sharing_labels(self) -> list[str]:
        """List sharing labels defined on the server."""
        response = await self._send("GET", "/api/v1/sharing-labels")
        raise_for_error(PLATFORM, response)
        return validate_response(PLATFORM, response, _labels_adapter)

    async def list_libraries(self) -> list[KomgaLibrary]:
        """List Komga libraries."""
        response = await self._send("GET", "/api/v1/libraries")
        raise_for_error(PLATFORM, response)
        return validate_response(PLATFORM, response, _libraries_adapter)


class MockKomgaClient(KomgaClient):
    """Mock Komga client for testing.

    Returns deterministic data and records every call without making real
    API requests.

    Attributes:
        created_users: Users passed to create_remote_user
        applied_restrictions: (user id, restriction) pairs that were applied
        restriction_error: Raised by apply_remote_restrictions when set
    """

    def __init__(self, public_host: str = "https://komga.test") -> None:
        self.public_host = public_host
        self.created_users: list[KomgaUserCreate] = []
        self.applied_restrictions: list[tuple[str, KomgaRestriction]] = []
        self.restriction_error: Optional[Exception] = None
        self.labels = ["kids", "manga"]
        self.libraries = [
            KomgaLibrary(id="lib-comics", name="Comics"),
            KomgaLibrary(id="lib-manga", name="Manga"),
        ]

    async def create_remote_user(self, user: KomgaUserCreate) -> RemoteUser:
        """Record the user and return a sequential id."""
        self.created_users.append(user)
        return RemoteUser(id=f"komga-user-{len(self.created_users)}")

    async def apply_remote_restrictions(
        self, remote_user_id: str, restriction: KomgaRestriction
    ) -> None:
        """Record the restriction, or raise restriction_error if set."""
        if self.restriction_error is not None:
            raise self.restriction_error
        self.applied_restrictions.append((remote_user_id, restriction))

    async def get_current_admin(self) -> RemoteAdmin:
        """Return a mock admin account."""
        return RemoteAdmin(id="komga-admin", is_admin=True, roles=["ADMIN"])

    async def list_sharing_labels(self) -> list[str]:
        """Return mock labels."""
        return list(self.labels)

    async def list_libraries(self) -> list[KomgaLibrary]:
        """Return mock libraries."""
        return list(self.libraries)
