"""CSV export of ranked candidates."""

import csv
import io
import logging
from collections.abc import Sequence
from datetime import datetime

from resume_screener.models import Candidate
from resume_screener.screening.stats import CandidateStats

logger = logging.getLogger("resume_screener.export")

HEADER = [
    "Rank",
    "Name",
    "Email",
    "Match Score (%)",
    "Skills",
    "Matched Skills",
    "Email Sent",
    "Processed Date",
]

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _candidate_row(rank: int, candidate: Candidate) -> list[str]:
    return [
        str(rank),
        candidate.name or "",
        candidate.email or "",
        f"{candidate.match_score:.1f}",
        candidate.skills or "",
        candidate.matched_skills or "",
        "Yes" if candidate.email_sent else "No",
        candidate.processed_at.strftime(DATE_FORMAT) if candidate.processed_at else "",
    ]


def _write_candidates(writer, candidates: Sequence[Candidate]) -> None:
    writer.writerow(HEADER)
    for rank, candidate in enumerate(candidates, 1):
        writer.writerow(_candidate_row(rank, candidate))


def _new_writer(buffer: io.StringIO):
    return csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")


def generate_candidate_csv(candidates: Sequence[Candidate]) -> str:
    """Ranked candidate table. Rank follows the order given."""
    logger.info("Generating CSV for %d candidates", len(candidates))
    buffer = io.StringIO()
    _write_candidates(_new_writer(buffer), candidates)
    return buffer.getvalue()


def generate_candidate_csv_with_stats(
    candidates: Sequence[Candidate],
    stats: CandidateStats,
    threshold: float,
    generated_at: datetime | None = None,
) -> str:
    """Summary block, a blank row, then the ranked candidate table."""
    logger.info("Generating CSV with statistics for %d candidates", len(candidates))
    generated_at = generated_at or datetime.now()

    buffer = io.StringIO()
    writer = _new_writer(buffer)
    writer.writerow(["RESUME SCREENING SUMMARY"])
    writer.writerow(["Total Candidates", str(stats.total)])
    writer.writerow([f"Qualified Candidates (≥{threshold:g}%)", str(stats.qualified)])
    writer.writerow(["Emails Sent", str(stats.emails_sent)])
    writer.writerow(["Average Score", f"{stats.average_score:.1f}%"])
    writer.writerow(["Generated On", generated_at.isoformat(timespec="seconds")])
    writer.writerow([""])

    _write_candidates(writer, candidates)
    return buffer.getvalue()


def generate_csv_filename(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"candidate_rankings_{now.strftime('%Y%m%d_%H%M%S')}.csv"
