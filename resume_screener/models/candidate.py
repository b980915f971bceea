"""Candidate model — one résumé's screening outcome."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resume_screener.utils.text_processing import split_skills

from .base import Base, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Candidate(Base):
    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Joined with ", " in extraction order
    skills: Mapped[str] = mapped_column(Text, default="")
    matched_skills: Mapped[str] = mapped_column(Text, default="")

    match_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, index=True)
    processed_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=_utcnow
    )
    email_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __init__(self, **kwargs):
        # Column defaults only fire on INSERT; the pipeline reads these before that
        kwargs.setdefault("processed_at", _utcnow())
        kwargs.setdefault("email_sent", False)
        kwargs.setdefault("skills", "")
        kwargs.setdefault("matched_skills", "")
        kwargs.setdefault("match_score", 0.0)
        super().__init__(**kwargs)

    @property
    def skill_list(self) -> list[str]:
        return split_skills(self.skills)

    @property
    def matched_skill_list(self) -> list[str]:
        return split_skills(self.matched_skills)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "skills": self.skills,
            "matched_skills": self.matched_skills,
            "match_score": self.match_score,
            "processed_at": self.processed_at.isoformat() if self.processed_at else None,
            "email_sent": self.email_sent,
        }

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.name!r} score={self.match_score:.1f}>"
