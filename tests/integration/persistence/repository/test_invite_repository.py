"""Integration tests for SqlInviteRepository.

Each test runs against a fresh SQLite file in the pytest temporary
directory.
"""

import json

import pytest
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from librarian.domain.error import (
    CorruptInvitePayloadError,
    InviteConflictError,
    UnknownInviteKindError,
)
from librarian.domain.model import KomgaInvite, NavidromeInvite
from librarian.domain.repository import InviteRepository
from librarian.domain.value import TokenId
from librarian.persistence.repository import SqlInviteRepository
from librarian.persistence.tables import invites_table
from tests.conftest import make_komga_invite, make_navidrome_invite
from tests.harness import create_env_fixture

# Integration test fixture - real SQLite store
integration_env = create_env_fixture(unmock={"persistence"})


@pytest.fixture(autouse=True)
def sqlite_database(monkeypatch, tmp_path):
    """Point the store at a temporary SQLite file."""
    path = tmp_path / "store" / "database.sqlite"
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{path}")
    return path


async def get_repository(env) -> InviteRepository:
    invite_repo = await env.get(InviteRepository)
    await invite_repo.initialize()
    return invite_repo


async def insert_raw_row(env, **row) -> None:
    """Write a row bypassing the repository, as older releases did."""
    session_factory = await env.get(async_sessionmaker[AsyncSession])
    async with session_factory.begin() as session:
        await session.execute(insert(invites_table).values(**row))


class TestInviteRepositoryIntegration:
    """Integration tests for SqlInviteRepository."""

    @pytest.mark.asyncio
    async def test_provides_sql_repository(self, integration_env, sqlite_database):
        invite_repo = await get_repository(integration_env)

        assert isinstance(invite_repo, SqlInviteRepository)
        assert sqlite_database.exists()

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, integration_env):
        invite_repo = await get_repository(integration_env)

        await invite_repo.initialize()

    @pytest.mark.asyncio
    async def test_insert_and_get_by_both_forms(self, integration_env):
        invite_repo = await get_repository(integration_env)
        invite = make_komga_invite(expires_in=3600, labels_allow={"kids"})

        await invite_repo.insert(invite)

        by_prefixed = await invite_repo.get(invite.token)
        by_canonical = await invite_repo.get(TokenId.parse(invite.token.canonical))
        assert isinstance(by_prefixed, KomgaInvite)
        assert by_prefixed.token == invite.token
        assert by_prefixed.option == invite.option
        assert by_canonical == by_prefixed

    @pytest.mark.asyncio
    async def test_token_is_stored_prefixed(self, integration_env):
        invite_repo = await get_repository(integration_env)
        invite = make_navidrome_invite(library_ids=[1])
        await invite_repo.insert(invite)

        session_factory = await integration_env.get(async_sessionmaker[AsyncSession])
        async with session_factory() as session:
            result = await session.execute(select(invites_table))
            row = result.mappings().one()

        assert row["token"] == str(invite.token)
        assert row["kind"] == "navidrome"
        assert json.loads(row["option"]) == {"isAdmin": False, "libraryIds": [1]}

    @pytest.mark.asyncio
    async def test_duplicate_insert_conflicts(self, integration_env):
        invite_repo = await get_repository(integration_env)
        invite = make_komga_invite()
        await invite_repo.insert(invite)

        with pytest.raises(InviteConflictError):
            await invite_repo.insert(invite)

    @pytest.mark.asyncio
    async def test_get_missing(self, integration_env):
        invite_repo = await get_repository(integration_env)

        assert await invite_repo.get(TokenId.generate()) is None

    @pytest.mark.asyncio
    async def test_delete(self, integration_env):
        invite_repo = await get_repository(integration_env)
        invite = make_komga_invite()
        await invite_repo.insert(invite)

        await invite_repo.delete(invite.token)
        # Deleting again is a no-op
        await invite_repo.delete(invite.token)

        assert await invite_repo.get(invite.token) is None

    @pytest.mark.asyncio
    async def test_set_remote_user_id(self, integration_env):
        """Recording the remote user leaves kind and options untouched."""
        invite_repo = await get_repository(integration_env)
        invite = make_navidrome_invite(expires_in=3600, is_admin=True, library_ids=[3])
        await invite_repo.insert(invite)

        await invite_repo.set_remote_user_id(invite.token, "nd-user-1")

        stored = await invite_repo.get(invite.token)
        assert isinstance(stored, NavidromeInvite)
        assert stored.kind == "navidrome"
        assert stored.remote_user_id == "nd-user-1"
        assert stored.option == invite.option
        assert stored.option.is_admin is True
        assert stored.option.library_ids == [3]

    @pytest.mark.asyncio
    async def test_set_remote_user_id_keeps_komga_options(self, integration_env):
        invite_repo = await get_repository(integration_env)
        invite = make_komga_invite(
            expires_in=3600, labels_allow={"kids"}, roles=["USER"]
        )
        await invite_repo.insert(invite)

        await invite_repo.set_remote_user_id(invite.token, "komga-user-1")

        stored = await invite_repo.get(invite.token)
        assert isinstance(stored, KomgaInvite)
        assert stored.remote_user_id == "komga-user-1"
        assert stored.option == invite.option

    @pytest.mark.asyncio
    async def test_list_mixed_kinds(self, integration_env):
        invite_repo = await get_repository(integration_env)
        komga = await invite_repo.insert(make_komga_invite())
        navidrome = await invite_repo.insert(make_navidrome_invite(expires_in=-10))
        restricted = await invite_repo.insert(make_komga_invite(roles=["USER"]))

        invites = await invite_repo.list_all()

        assert len(invites) == 3
        assert {invite.token for invite in invites} == {
            komga.token,
            navidrome.token,
            restricted.token,
        }
        kinds = {type(invite) for invite in invites}
        assert kinds == {KomgaInvite, NavidromeInvite}


class TestLegacyRows:
    """Rows written by older releases or edited by hand."""

    @pytest.mark.asyncio
    async def test_canonical_token_row(self, integration_env):
        """Rows keyed by the hyphenated UUID are found, updated and deleted."""
        invite_repo = await get_repository(integration_env)
        token = TokenId.generate()
        await insert_raw_row(
            integration_env,
            token=token.canonical,
            option='{"roles": ["USER"]}',
            uuid=None,
            kind="KOMGA",
        )

        invite = await invite_repo.get(token)
        assert isinstance(invite, KomgaInvite)
        assert invite.option.roles == ["USER"]

        await invite_repo.set_remote_user_id(token, "komga-1")
        assert (await invite_repo.get(token)).remote_user_id == "komga-1"

        await invite_repo.delete(token)
        assert await invite_repo.get(token) is None

    @pytest.mark.asyncio
    async def test_unknown_kind(self, integration_env):
        invite_repo = await get_repository(integration_env)
        token = TokenId.generate()
        await insert_raw_row(
            integration_env, token=str(token), option="{}", uuid=None, kind="plex"
        )

        with pytest.raises(UnknownInviteKindError):
            await invite_repo.get(token)

    @pytest.mark.asyncio
    async def test_corrupt_option(self, integration_env):
        invite_repo = await get_repository(integration_env)
        token = TokenId.generate()
        await insert_raw_row(
            integration_env,
            token=str(token),
            option='{"libraryIds": "everything"}',
            uuid=None,
            kind="navidrome",
        )

        with pytest.raises(CorruptInvitePayloadError):
            await invite_repo.get(token)
