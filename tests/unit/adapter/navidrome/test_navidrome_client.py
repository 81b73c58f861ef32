"""Unit tests for HttpNavidromeClient against a mocked transport."""

import asyncio
import json

import httpx
import jwt
import pytest

from librarian.adapter.navidrome import HttpNavidromeClient
from librarian.adapter.navidrome.client import AUTH_HEADER, decode_claims, strip_bearer
from librarian.domain.error import (
    RemoteAuthenticationError,
    RemoteViolationError,
    RestrictionApplicationError,
)
from librarian.domain.model import NavidromeLibraryAccess, NavidromeUserCreate

SIGNING_KEY = "navidrome-test-signing-key-0123456789"


def make_token(uid: str = "admin-id", adm: bool = True, **claims) -> str:
    """Build a Navidrome session token."""
    return jwt.encode({"uid": uid, "adm": adm, "sub": "admin", **claims}, SIGNING_KEY)


class FakeNavidrome:
    """Minimal Navidrome server answering login and user routes."""

    def __init__(self, adm: bool = True) -> None:
        self.adm = adm
        self.logins = 0
        self.requests: list[httpx.Request] = []
        self.next_responses: list[httpx.Response] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/auth/login":
            self.logins += 1
            return httpx.Response(
                200,
                json={"token": make_token(adm=self.adm, n=self.logins), "id": "admin-id"},
            )
        if self.next_responses:
            return self.next_responses.pop(0)
        return httpx.Response(
            200,
            json={"id": "new-user"},
            headers={AUTH_HEADER: f"Bearer rotated-{len(self.requests)}"},
        )

    def authorization_headers(self) -> list[str | None]:
        return [
            request.headers.get(AUTH_HEADER)
            for request in self.requests
            if request.url.path != "/auth/login"
        ]


def make_client(server: FakeNavidrome) -> HttpNavidromeClient:
    return HttpNavidromeClient(
        host="http://navidrome:4533",
        username="admin",
        password="hunter2",
        transport=httpx.MockTransport(server),
    )


NEW_USER = NavidromeUserCreate(
    user_name="fan", name="fan", email="fan@example.com", password="secret1"
)


class TestHelpers:
    """Tests for token helpers."""

    def test_strip_bearer(self):
        assert strip_bearer("Bearer abc") == "abc"
        assert strip_bearer("bearer abc") == "abc"
        assert strip_bearer("abc") == "abc"

    def test_decode_claims(self):
        claims = decode_claims(make_token(uid="u-1", adm=False))

        assert claims.uid == "u-1"
        assert claims.adm is False

    def test_decode_claims_rejects_garbage(self):
        with pytest.raises(RemoteAuthenticationError):
            decode_claims("not-a-jwt")

    def test_decode_claims_requires_uid(self):
        token = jwt.encode({"adm": True}, SIGNING_KEY)

        with pytest.raises(RemoteAuthenticationError):
            decode_claims(token)


class TestSession:
    """Tests for login and token rotation."""

    @pytest.mark.asyncio
    async def test_logs_in_once_and_follows_rotation(self):
        """The first call logs in; later calls send the rotated token."""
        server = FakeNavidrome()
        client = make_client(server)

        await client.create_remote_user(NEW_USER)
        await client.create_remote_user(NEW_USER)

        assert server.logins == 1
        login = server.requests[0]
        assert json.loads(login.content) == {"username": "admin", "password": "hunter2"}
        headers = server.authorization_headers()
        assert headers[0] == f"Bearer {make_token(n=1)}"
        assert headers[1] == "Bearer rotated-2"

    @pytest.mark.asyncio
    async def test_unauthorized_response_forces_new_login(self):
        server = FakeNavidrome()
        client = make_client(server)
        await client.create_remote_user(NEW_USER)
        server.next_responses.append(httpx.Response(401))

        with pytest.raises(RemoteAuthenticationError):
            await client.create_remote_user(NEW_USER)
        await client.create_remote_user(NEW_USER)

        assert server.logins == 2

    @pytest.mark.asyncio
    async def test_failed_login(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "Invalid username or password"})

        client = HttpNavidromeClient(
            host="http://navidrome",
            username="admin",
            password="wrong",
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(RemoteAuthenticationError):
            await client.get_current_admin()

    @pytest.mark.asyncio
    async def test_login_without_token(self):
        client = HttpNavidromeClient(
            host="http://navidrome",
            username="admin",
            password="hunter2",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )

        with pytest.raises(RemoteAuthenticationError):
            await client.get_current_admin()

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_login(self):
        server = FakeNavidrome()
        client = make_client(server)

        await asyncio.gather(*(client.create_remote_user(NEW_USER) for _ in range(3)))

        assert server.logins == 1


class TestOperations:
    """Tests for user, library and admin operations."""

    @pytest.mark.asyncio
    async def test_create_user_body(self):
        server = FakeNavidrome()
        client = make_client(server)

        user = await client.create_remote_user(NEW_USER)

        assert user.id == "new-user"
        request = server.requests[1]
        assert request.method == "POST"
        assert request.url.path == "/api/user"
        assert json.loads(request.content) == {
            "userName": "fan",
            "name": "fan",
            "email": "fan@example.com",
            "password": "secret1",
            "isAdmin": False,
        }

    @pytest.mark.asyncio
    async def test_apply_library_access(self):
        server = FakeNavidrome()
        client = make_client(server)

        await client.apply_remote_restrictions(
            "new-user", NavidromeLibraryAccess(library_ids=[1, 2])
        )

        request = server.requests[1]
        assert request.method == "PUT"
        assert request.url.path == "/api/user/new-user/library"
        assert json.loads(request.content) == {"libraryIds": [1, 2]}

    @pytest.mark.asyncio
    async def test_apply_library_access_violation(self):
        server = FakeNavidrome()
        server.next_responses.append(
            httpx.Response(
                400,
                json={"violations": [{"field_name": "libraryIds", "message": "bad"}]},
            )
        )
        client = make_client(server)

        with pytest.raises(RemoteViolationError):
            await client.apply_remote_restrictions(
                "new-user", NavidromeLibraryAccess(library_ids=[9])
            )

    @pytest.mark.asyncio
    async def test_apply_library_access_failure(self):
        server = FakeNavidrome()
        server.next_responses.append(httpx.Response(500))
        client = make_client(server)

        with pytest.raises(RestrictionApplicationError):
            await client.apply_remote_restrictions(
                "new-user", NavidromeLibraryAccess(library_ids=[1])
            )

    @pytest.mark.asyncio
    async def test_list_libraries_query(self):
        server = FakeNavidrome()
        server.next_responses.append(
            httpx.Response(200, json=[{"id": 1, "name": "Music", "path": "/music"}])
        )
        client = make_client(server)

        libraries = await client.list_libraries()

        assert libraries[0].id == 1
        params = server.requests[1].url.params
        assert params["_start"] == "0"
        assert params["_end"] == "-1"
        assert params["_sort"] == "id"
        assert params["_order"] == "asc"

    @pytest.mark.asyncio
    async def test_current_admin_from_claims(self):
        client = make_client(FakeNavidrome(adm=True))

        admin = await client.get_current_admin()

        assert admin.id == "admin-id"
        assert admin.is_admin is True
        assert admin.roles == ["admin"]

    @pytest.mark.asyncio
    async def test_current_non_admin(self):
        client = make_client(FakeNavidrome(adm=False))

        admin = await client.get_current_admin()

        assert admin.is_admin is False
        assert admin.roles == []
