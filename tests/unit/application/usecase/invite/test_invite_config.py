"""Unit tests for GetInviteConfigUseCase and GetServerInfoUseCase."""

import pytest

from librarian.adapter.komga import MockKomgaClient
from librarian.application.usecase.invite import (
    GetInviteConfigUseCase,
    GetServerInfoUseCase,
)
from librarian.domain.value import InviteKind
from librarian.version import __version__
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetInviteConfigUseCase:
    """Tests for GetInviteConfigUseCase."""

    @pytest.mark.asyncio
    async def test_both_platforms_active(self, unit_env):
        use_case = await unit_env.get(GetInviteConfigUseCase)

        response = await use_case.execute()

        assert response.komga.active is True
        assert response.komga.labels == ["kids", "manga"]
        assert [lib.id for lib in response.komga.libraries] == [
            "lib-comics",
            "lib-manga",
        ]
        assert response.navidrome.active is True
        assert [lib.name for lib in response.navidrome.libraries] == [
            "Music",
            "Podcasts",
        ]

    @pytest.mark.asyncio
    async def test_navidrome_not_configured(self):
        use_case = GetInviteConfigUseCase(
            platform_clients={InviteKind.KOMGA: MockKomgaClient()}
        )

        response = await use_case.execute()

        assert response.komga.active is True
        assert response.navidrome.active is False
        assert response.navidrome.libraries == []


class TestGetServerInfoUseCase:
    """Tests for GetServerInfoUseCase."""

    @pytest.mark.asyncio
    async def test_reports_configured_servers(self, unit_env):
        use_case = await unit_env.get(GetServerInfoUseCase)

        response = await use_case.execute()

        assert response.servers == [InviteKind.KOMGA, InviteKind.NAVIDROME]
        assert response.v == __version__

    @pytest.mark.asyncio
    async def test_komga_only(self):
        use_case = GetServerInfoUseCase(
            platform_clients={InviteKind.KOMGA: MockKomgaClient()}
        )

        response = await use_case.execute()

        assert response.servers == [InviteKind.KOMGA]
