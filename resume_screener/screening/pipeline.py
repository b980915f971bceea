"""Screening pipeline: extract -> structure -> score -> persist -> notify -> rank."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

from resume_screener.errors import ExternalServiceFailure, InputError, PersistenceError
from resume_screener.extraction.models import ResumeFile
from resume_screener.extraction.pdf_text import MAX_FILE_SIZE, validate_resume_file
from resume_screener.llm.field_extractor import CandidateFields
from resume_screener.matching.skill_matcher import match_skills
from resume_screener.models import Candidate
from resume_screener.utils.text_processing import join_skills

logger = logging.getLogger("resume_screener.pipeline")


class TextExtractor(Protocol):
    def extract(self, resume: ResumeFile) -> str: ...


class FieldExtractorLike(Protocol):
    def extract_required_skills(self, job_description: str) -> list[str]: ...

    def extract_candidate_fields(self, resume_text: str) -> CandidateFields: ...


class Notifier(Protocol):
    def is_configured(self) -> bool: ...

    def notify(self, candidate: Candidate, threshold: float) -> bool: ...


class Store(Protocol):
    def save(self, candidate: Candidate) -> Candidate: ...


@dataclass(frozen=True)
class Success:
    filename: str
    candidate: Candidate


@dataclass(frozen=True)
class Skipped:
    filename: str
    reason: str


FileOutcome = Success | Skipped


@dataclass
class ScreeningResult:
    """Ranked candidates plus the per-file outcome of a batch."""

    candidates: list[Candidate] = field(default_factory=list)
    outcomes: list[FileOutcome] = field(default_factory=list)
    required_skills: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> list[Skipped]:
        return [o for o in self.outcomes if isinstance(o, Skipped)]

    @property
    def is_empty(self) -> bool:
        return not self.candidates


class ScreeningPipeline:
    """Screens a batch of résumés against one job description.

    All collaborators are injected. A failure on one file never aborts the
    batch; only an invalid batch, a failed job-description extraction or an
    unavailable store do.
    """

    def __init__(
        self,
        field_extractor: FieldExtractorLike,
        text_extractor: TextExtractor,
        store: Store,
        notifier: Notifier,
        threshold: float = 20.0,
        max_file_size: int = MAX_FILE_SIZE,
    ):
        self.field_extractor = field_extractor
        self.text_extractor = text_extractor
        self.store = store
        self.notifier = notifier
        self.threshold = threshold
        self.max_file_size = max_file_size

    def run(self, job_description: str, files: Sequence[ResumeFile]) -> list[Candidate]:
        """Screen a batch and return candidates ranked by score, highest first."""
        return self.screen(job_description, files).candidates

    def screen(self, job_description: str, files: Sequence[ResumeFile]) -> ScreeningResult:
        if not job_description or not job_description.strip():
            raise InputError("Job description is required")
        if not files:
            raise InputError("At least one resume file is required")

        logger.info("Starting resume processing with %d resume files", len(files))

        try:
            required_skills = self.field_extractor.extract_required_skills(job_description)
        except ExternalServiceFailure:
            raise
        except Exception as e:
            raise ExternalServiceFailure(f"Could not extract skills from job description: {e}") from e

        outcomes = [self.process_file(resume, required_skills) for resume in files]
        candidates = [o.candidate for o in outcomes if isinstance(o, Success)]

        self._notify_candidates(candidates)

        # sorted() is stable, so equal scores keep upload order
        ranked = sorted(candidates, key=lambda c: c.match_score, reverse=True)
        logger.info(
            "Finished processing %d candidates (%d file(s) skipped)",
            len(ranked), len(outcomes) - len(ranked),
        )
        return ScreeningResult(candidates=ranked, outcomes=outcomes, required_skills=required_skills)

    def process_file(self, resume: ResumeFile, required_skills: Sequence[str]) -> FileOutcome:
        """Run one file through validate -> extract -> fields -> match -> save."""
        filename = resume.filename or "<unnamed>"
        try:
            if resume.is_empty:
                return self._skip(filename, "Empty file")

            logger.info("Processing resume: %s", filename)
            validate_resume_file(resume, self.max_file_size)

            resume_text = self.text_extractor.extract(resume)
            if not resume_text or not resume_text.strip():
                return self._skip(filename, "No text extracted")

            fields = self.field_extractor.extract_candidate_fields(resume_text)
            if not fields.is_complete:
                return self._skip(filename, "Could not extract name/email")

            match = match_skills(required_skills, fields.skills)
            candidate = Candidate(
                name=fields.name,
                email=fields.email,
                skills=join_skills(fields.skills),
                matched_skills=join_skills(match.sorted_matches()),
                match_score=match.score,
                processed_at=datetime.now(timezone.utc),
                email_sent=False,
            )
            candidate = self.store.save(candidate)

        except PersistenceError:
            raise
        except Exception as e:
            logger.error("Error processing resume: %s", filename, exc_info=True)
            return self._skip(filename, str(e) or type(e).__name__)

        logger.info("Processed candidate: %s - Score: %.1f%%", candidate.name, candidate.match_score)
        return Success(filename, candidate)

    def _skip(self, filename: str, reason: str) -> Skipped:
        logger.warning("Skipping %s: %s", filename, reason)
        return Skipped(filename, reason)

    def _notify_candidates(self, candidates: list[Candidate]) -> None:
        if not candidates:
            logger.info("No candidates to send emails.")
            return

        try:
            configured = self.notifier.is_configured()
        except Exception as e:
            logger.error("Could not check email config: %s", e)
            configured = False

        if not configured:
            logger.warning("Email config missing. Skipping email notifications.")
            return

        logger.info("Sending emails to %d candidates (shortlisted + rejected)", len(candidates))
        for candidate in candidates:
            try:
                sent = bool(self.notifier.notify(candidate, self.threshold))
            except Exception as e:
                logger.error("Notifier failed for %s: %s", candidate.email, e)
                sent = False
            candidate.email_sent = sent
            self.store.save(candidate)
