"""Unit tests for CreateInviteUseCase."""

import pytest
from pydantic import TypeAdapter, ValidationError

from librarian.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    CreateKomgaInviteRequest,
    CreateNavidromeInviteRequest,
)
from librarian.domain.repository import InviteRepository
from librarian.domain.value import InviteKind, TokenId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

request_adapter = TypeAdapter(CreateInviteRequest)


class TestCreateInviteRequest:
    """Tests for parsing create invite requests."""

    def test_komga_request_from_camel_case(self):
        request = request_adapter.validate_python(
            {
                "kind": "komga",
                "expiresAt": 1700000000,
                "labelsAllow": ["kids"],
                "sharedLibraries": {"all": False, "libraryIds": ["lib-1"]},
            }
        )

        assert isinstance(request, CreateKomgaInviteRequest)
        option = request.to_option()
        assert option.expires_at == 1700000000
        assert option.labels_allow == {"kids"}
        assert option.shared_libraries.library_ids == {"lib-1"}

    def test_navidrome_request(self):
        request = request_adapter.validate_python(
            {"kind": "navidrome", "isAdmin": True, "libraryIds": [1, 3]}
        )

        assert isinstance(request, CreateNavidromeInviteRequest)
        assert request.to_option().library_ids == [1, 3]

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            request_adapter.validate_python({"kind": "jellyfin"})

    def test_negative_expiry_is_rejected(self):
        with pytest.raises(ValidationError):
            request_adapter.validate_python({"kind": "komga", "expiresAt": -1})


class TestCreateInviteUseCase:
    """Tests for CreateInviteUseCase."""

    @pytest.mark.asyncio
    async def test_create_komga_invite(self, unit_env):
        """The invite is stored and returned with its prefixed token."""
        use_case = await unit_env.get(CreateInviteUseCase)
        invite_repo = await unit_env.get(InviteRepository)

        response = await use_case.execute(CreateKomgaInviteRequest(roles=["USER"]))

        item = response.invite
        assert item.kind == InviteKind.KOMGA
        assert item.token.startswith("kli_")
        assert item.uuid is None
        assert item.option["roles"] == ["USER"]
        assert await invite_repo.get(TokenId.parse(item.token)) is not None

    @pytest.mark.asyncio
    async def test_create_navidrome_invite(self, unit_env):
        use_case = await unit_env.get(CreateInviteUseCase)

        response = await use_case.execute(
            CreateNavidromeInviteRequest(is_admin=True, library_ids=[2])
        )

        assert response.invite.kind == InviteKind.NAVIDROME
        assert response.invite.option == {
            "expiresAt": None,
            "isAdmin": True,
            "libraryIds": [2],
        }
