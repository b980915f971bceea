"""Screening service — the façade used by the CLI and the web app."""

import logging
from collections.abc import Sequence
from pathlib import Path

from resume_screener.config import AppConfig
from resume_screener.export.csv_report import generate_candidate_csv_with_stats, generate_csv_filename
from resume_screener.extraction.models import ResumeFile
from resume_screener.extraction.pdf_text import PdfTextExtractor
from resume_screener.llm.clients import create_llm_client
from resume_screener.llm.field_extractor import FieldExtractor
from resume_screener.models import Candidate, create_db_engine, create_session_factory, init_db
from resume_screener.notifications.notifier import EmailNotifier
from resume_screener.screening.pipeline import ScreeningPipeline, ScreeningResult
from resume_screener.screening.stats import CandidateStats, compute_stats
from resume_screener.storage.candidate_store import CandidateStore

logger = logging.getLogger("resume_screener.service")


class ScreeningService:
    def __init__(self, pipeline: ScreeningPipeline, store: CandidateStore, threshold: float):
        self.pipeline = pipeline
        self.store = store
        self.threshold = threshold

    def process_resumes(self, job_description: str, files: Sequence[ResumeFile]) -> ScreeningResult:
        return self.pipeline.screen(job_description, files)

    def get_all_candidates_ranked(self) -> list[Candidate]:
        return self.store.find_all_ordered_by_score_desc()

    def get_qualified_candidates(self) -> list[Candidate]:
        return self.store.find_by_score_at_least(self.threshold)

    def get_candidate(self, candidate_id: int) -> Candidate | None:
        return self.store.get(candidate_id)

    def get_candidate_stats(self) -> CandidateStats:
        """Stats over every persisted candidate, not just the last batch."""
        return compute_stats(self.store.find_all(), self.threshold)

    def clear_all_candidates(self) -> int:
        deleted = self.store.delete_all()
        logger.info("All candidate data cleared.")
        return deleted

    def export_csv(self) -> tuple[str, str]:
        """Return (filename, content) for the ranked candidate report."""
        candidates = self.get_all_candidates_ranked()
        stats = compute_stats(candidates, self.threshold)
        content = generate_candidate_csv_with_stats(candidates, stats, self.threshold)
        filename = generate_csv_filename()
        logger.info("CSV export generated: %s (%d candidates)", filename, len(candidates))
        return filename, content


def build_service(config: AppConfig) -> ScreeningService:
    """Wire the real collaborators from configuration."""
    if config.database_url.startswith("sqlite:///"):
        db_file = config.database_url.removeprefix("sqlite:///")
        if db_file and db_file != ":memory:":
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(config.database_url)
    init_db(engine)
    store = CandidateStore(create_session_factory(engine))

    pipeline = ScreeningPipeline(
        field_extractor=FieldExtractor(create_llm_client(config.llm)),
        text_extractor=PdfTextExtractor(ocr_enabled=config.screening.ocr_enabled),
        store=store,
        notifier=EmailNotifier(config.email),
        threshold=config.screening.shortlist_threshold,
        max_file_size=config.screening.max_file_size_bytes,
    )
    return ScreeningService(pipeline, store, config.screening.shortlist_threshold)
