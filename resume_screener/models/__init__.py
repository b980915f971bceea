"""ORM models for screened candidates."""

from .base import Base, UTCDateTime, create_db_engine, create_session_factory, init_db
from .candidate import Candidate

__all__ = [
    "Base",
    "UTCDateTime",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "Candidate",
]
