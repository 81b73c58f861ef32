"""SQLAlchemy table definitions for K-Librarian.

The schema is created on start-up by ``InviteRepository.initialize``.
"""

from sqlalchemy import Column, DateTime, MetaData, Table, Text, func

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    # Prefixed token; rows written by older releases hold the canonical UUID
    Column("token", Text, primary_key=True),
    Column("option", Text, nullable=False),  # JSON, camelCase keys
    Column("uuid", Text, nullable=True),  # Remote user id once created
    Column("kind", Text, nullable=False),  # 'komga', 'navidrome'
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=True,
        server_default=func.current_timestamp(),
    ),
)
