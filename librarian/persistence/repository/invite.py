"""SQLite implementation of Invite repository."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import logfire
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from librarian.domain.error import InviteConflictError, StoreError
from librarian.domain.model import Invite
from librarian.domain.repository import InviteRepository
from librarian.domain.value import TokenId
from librarian.persistence.mappers import invite_to_dict, row_to_invite
from librarian.persistence.tables import invites_table, metadata


class SqlInviteRepository(InviteRepository):
    """SQL implementation of InviteRepository.

    Every operation runs in its own transaction and commits before
    returning, so writes made during a redemption survive a later failure.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def _begin(self) -> AsyncIterator[AsyncSession]:
        """Open a session in a transaction committed on exit."""
        try:
            async with self.session_factory.begin() as session:
                yield session
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logfire.error("Invite store failure", error=str(e))
            raise StoreError(f"database error: {e}") from e

    @staticmethod
    def _token_keys(token_id: TokenId) -> list[str]:
        """Both textual forms a row may be stored under."""
        return [str(token_id), token_id.canonical]

    async def initialize(self) -> None:
        """Create the invites table if it does not exist."""
        async with self._begin() as session:
            await session.run_sync(
                lambda sync_session: metadata.create_all(sync_session.connection())
            )

    async def insert(self, invite: Invite) -> Invite:
        """Store a new invite.

        Args:
            invite: Invite to store

        Returns:
            Stored invite
        """
        try:
            async with self._begin() as session:
                stmt = insert(invites_table).values(**invite_to_dict(invite))
                await session.execute(stmt)
        except IntegrityError as e:
            raise InviteConflictError(str(invite.token)) from e
        return invite

    async def get(self, token_id: TokenId) -> Optional[Invite]:
        """Find an invite by token.

        Args:
            token_id: Invite token to look up

        Returns:
            Invite if found, None otherwise
        """
        async with self._begin() as session:
            stmt = select(invites_table).where(
                invites_table.c.token.in_(self._token_keys(token_id))
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def delete(self, token_id: TokenId) -> None:
        """Delete an invite, if present.

        Args:
            token_id: Invite token
        """
        async with self._begin() as session:
            stmt = delete(invites_table).where(
                invites_table.c.token.in_(self._token_keys(token_id))
            )
            await session.execute(stmt)

    async def set_remote_user_id(self, token_id: TokenId, user_id: str) -> None:
        """Record the remote user id of an invite.

        Args:
            token_id: Invite token
            user_id: Remote user id
        """
        async with self._begin() as session:
            stmt = (
                update(invites_table)
                .where(invites_table.c.token.in_(self._token_keys(token_id)))
                .values(uuid=user_id)
            )
            await session.execute(stmt)

    async def list_all(self) -> list[Invite]:
        """List every invite, oldest first.

        Returns:
            List of invites
        """
        async with self._begin() as session:
            stmt = select(invites_table).order_by(invites_table.c.created_at)
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]
