"""SQLite database engine and schema via SQLAlchemy Core."""

from wimt.infrastructure.database.engine import create_db_engine, init_database
from wimt.infrastructure.database.schema import categories, metadata, session_segments, sessions

__all__ = [
    "categories",
    "create_db_engine",
    "init_database",
    "metadata",
    "session_segments",
    "sessions",
]
