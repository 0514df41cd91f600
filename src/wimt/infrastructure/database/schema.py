"""SQLAlchemy Core table definitions for the wimt database.

Timestamps are stored as REAL milliseconds since the epoch so fractional
values survive a round trip unchanged.
"""

from __future__ import annotations

from sqlalchemy import REAL, Column, ForeignKey, Index, MetaData, Table, Text

metadata = MetaData()

categories = Table(
    "categories",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("created_at", REAL, nullable=False),
    Column("color", Text),
    Column("icon", Text),
)

sessions = Table(
    "sessions",
    metadata,
    Column("id", Text, primary_key=True),
    Column("category_id", Text, nullable=False),
    Column("created_at", REAL, nullable=False),
    Column("stopped_at", REAL),
    Column("active_segment_id", Text),  # NULL unless the session is active
)

session_segments = Table(
    "session_segments",
    metadata,
    Column("id", Text, primary_key=True),
    Column("session_id", Text, ForeignKey("sessions.id"), nullable=False),
    Column("started_at", REAL, nullable=False),
    Column("stopped_at", REAL),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_sessions_category", sessions.c.category_id)
Index("ix_sessions_stopped_at", sessions.c.stopped_at)
Index("ix_session_segments_session", session_segments.c.session_id)
