"""Unit tests for HttpKomgaClient against a mocked transport."""

import base64
import json

import httpx
import pytest

from librarian.adapter.komga import HttpKomgaClient
from librarian.domain.error import (
    RemoteAuthenticationError,
    RemoteConnectionError,
    RemoteResponseError,
    RemoteServiceError,
    RemoteViolationError,
    RestrictionApplicationError,
)
from librarian.domain.model import KomgaRestriction, KomgaUserCreate, SharedLibraries


def make_client(handler) -> tuple[HttpKomgaClient, list[httpx.Request]]:
    """Build a client whose requests are recorded and answered by handler."""
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = HttpKomgaClient(
        host="http://komga:25600/",
        username="admin@example.com",
        password="hunter2",
        public_host="https://books.example.com",
        transport=httpx.MockTransport(record),
    )
    return client, requests


class TestCreateRemoteUser:
    """Tests for create_remote_user."""

    @pytest.mark.asyncio
    async def test_posts_user_with_basic_auth(self):
        client, requests = make_client(
            lambda request: httpx.Response(200, json={"id": "0ABC", "email": "x"})
        )

        user = await client.create_remote_user(
            KomgaUserCreate(email="reader@example.com", password="secret1", roles=["USER"])
        )

        assert user.id == "0ABC"
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v2/users"
        assert json.loads(request.content) == {
            "email": "reader@example.com",
            "password": "secret1",
            "roles": ["USER"],
        }
        expected = base64.b64encode(b"admin@example.com:hunter2").decode()
        assert request.headers["authorization"] == f"Basic {expected}"
        assert request.headers["user-agent"].startswith("K-Librarian/")

    @pytest.mark.asyncio
    async def test_violations_are_reported(self):
        client, _ = make_client(
            lambda request: httpx.Response(
                400,
                json={
                    "violations": [
                        {"fieldName": "email", "message": "must be a well-formed email"}
                    ]
                },
            )
        )

        with pytest.raises(RemoteViolationError) as exc_info:
            await client.create_remote_user(
                KomgaUserCreate(email="bad", password="secret1", roles=[])
            )

        assert exc_info.value.violations == [("email", "must be a well-formed email")]

    @pytest.mark.asyncio
    async def test_structured_error(self):
        client, _ = make_client(
            lambda request: httpx.Response(
                409, json={"error": "Conflict", "message": "User already exists"}
            )
        )

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.create_remote_user(
                KomgaUserCreate(email="a@example.com", password="secret1", roles=[])
            )

        assert exc_info.value.status_code == 409
        assert str(exc_info.value) == "[komga] Conflict: User already exists"

    @pytest.mark.asyncio
    async def test_rejected_credentials(self):
        client, _ = make_client(lambda request: httpx.Response(401))

        with pytest.raises(RemoteAuthenticationError):
            await client.create_remote_user(
                KomgaUserCreate(email="a@example.com", password="secret1", roles=[])
            )

    @pytest.mark.asyncio
    async def test_response_without_id(self):
        client, _ = make_client(lambda request: httpx.Response(200, json={}))

        with pytest.raises(RemoteResponseError):
            await client.create_remote_user(
                KomgaUserCreate(email="a@example.com", password="secret1", roles=[])
            )

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = make_client(refuse)

        with pytest.raises(RemoteConnectionError):
            await client.create_remote_user(
                KomgaUserCreate(email="a@example.com", password="secret1", roles=[])
            )


class TestApplyRemoteRestrictions:
    """Tests for apply_remote_restrictions."""

    @pytest.mark.asyncio
    async def test_patch_omits_unset_fields(self):
        client, requests = make_client(lambda request: httpx.Response(204))

        await client.apply_remote_restrictions(
            "0ABC",
            KomgaRestriction(
                labels_allow={"kids"},
                shared_libraries=SharedLibraries(all=False, library_ids={"lib-1"}),
            ),
        )

        request = requests[0]
        assert request.method == "PATCH"
        assert request.url.path == "/api/v2/users/0ABC"
        assert json.loads(request.content) == {
            "labelsAllow": ["kids"],
            "sharedLibraries": {"all": False, "libraryIds": ["lib-1"]},
        }

    @pytest.mark.asyncio
    async def test_failure_without_violations(self):
        client, _ = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(RestrictionApplicationError) as exc_info:
            await client.apply_remote_restrictions("0ABC", KomgaRestriction())

        assert exc_info.value.status_code == 500


class TestQueries:
    """Tests for admin, label and library queries."""

    @pytest.mark.asyncio
    async def test_current_admin(self):
        client, requests = make_client(
            lambda request: httpx.Response(
                200, json={"id": "admin-1", "roles": ["ADMIN", "USER"]}
            )
        )

        admin = await client.get_current_admin()

        assert requests[0].url.path == "/api/v2/users/me"
        assert admin.id == "admin-1"
        assert admin.is_admin is True

    @pytest.mark.asyncio
    async def test_current_user_without_admin_role(self):
        client, _ = make_client(
            lambda request: httpx.Response(200, json={"id": "u", "roles": ["USER"]})
        )

        admin = await client.get_current_admin()

        assert admin.is_admin is False

    @pytest.mark.asyncio
    async def test_labels_and_libraries(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/v1/sharing-labels":
                return httpx.Response(200, json=["kids", "adult"])
            return httpx.Response(
                200,
                json=[
                    {"id": "lib-1", "name": "Comics", "root": "/data", "unavailable": False}
                ],
            )

        client, _ = make_client(handler)

        assert await client.list_sharing_labels() == ["kids", "adult"]
        libraries = await client.list_libraries()
        assert libraries[0].id == "lib-1"
        assert libraries[0].name == "Comics"

    @pytest.mark.asyncio
    async def test_malformed_library_list(self):
        client, _ = make_client(lambda request: httpx.Response(200, json={"x": 1}))

        with pytest.raises(RemoteResponseError):
            await client.list_libraries()

    def test_public_host_defaults_to_host(self):
        client = HttpKomgaClient(host="http://komga", username="a", password="b")

        assert client.public_host == "http://komga"
