"""SQLAlchemy-backed persistence for screened candidates."""

import logging
from contextlib import contextmanager

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from resume_screener.errors import PersistenceError
from resume_screener.models import Candidate

logger = logging.getLogger("resume_screener.storage")


class CandidateStore:
    """Candidate repository. Each call runs in its own short-lived session."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Database error: %s", e)
            raise PersistenceError(f"Candidate store unavailable: {e}") from e
        finally:
            db.close()

    def save(self, candidate: Candidate) -> Candidate:
        """Insert or update a candidate. Assigns the id on first save."""
        with self._session() as db:
            merged = db.merge(candidate)
            db.flush()
            candidate.id = merged.id
            candidate.processed_at = merged.processed_at
        return candidate

    def get(self, candidate_id: int) -> Candidate | None:
        with self._session() as db:
            return db.get(Candidate, candidate_id)

    def find_all_ordered_by_score_desc(self) -> list[Candidate]:
        with self._session() as db:
            stmt = select(Candidate).order_by(Candidate.match_score.desc(), Candidate.id)
            return list(db.scalars(stmt))

    def find_by_score_at_least(self, threshold: float) -> list[Candidate]:
        with self._session() as db:
            stmt = (
                select(Candidate)
                .where(Candidate.match_score >= threshold)
                .order_by(Candidate.match_score.desc(), Candidate.id)
            )
            return list(db.scalars(stmt))

    def find_all(self) -> list[Candidate]:
        with self._session() as db:
            return list(db.scalars(select(Candidate).order_by(Candidate.id)))

    def find_email_not_sent(self) -> list[Candidate]:
        """Candidates still waiting for a notification."""
        with self._session() as db:
            stmt = select(Candidate).where(Candidate.email_sent.is_(False)).order_by(Candidate.id)
            return list(db.scalars(stmt))

    def delete_all(self) -> int:
        """Remove every candidate. Returns the number of rows deleted."""
        with self._session() as db:
            result = db.execute(delete(Candidate))
            deleted = result.rowcount or 0
        logger.info("Cleared %d candidate(s)", deleted)
        return deleted
