"""Aggregate statistics over persisted candidates."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass

from resume_screener.models import Candidate


@dataclass(frozen=True)
class CandidateStats:
    total: int = 0
    qualified: int = 0
    emails_sent: int = 0
    average_score: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def compute_stats(candidates: Sequence[Candidate], threshold: float) -> CandidateStats:
    """Fold candidates into counts and a mean score. Recomputed on every call."""
    total = len(candidates)
    if not total:
        return CandidateStats()

    return CandidateStats(
        total=total,
        qualified=sum(1 for c in candidates if c.match_score >= threshold),
        emails_sent=sum(1 for c in candidates if c.email_sent),
        average_score=sum(c.match_score for c in candidates) / total,
    )
