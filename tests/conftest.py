"""Shared fakes and fixtures."""

import os
import tempfile

import pytest

from resume_screener.errors import ExternalServiceFailure
from resume_screener.llm.field_extractor import CandidateFields
from resume_screener.models import create_db_engine, create_session_factory, init_db
from resume_screener.storage.candidate_store import CandidateStore


class FakeLLMClient:
    """Returns canned replies in order and records every prompt."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeFieldExtractor:
    """Required skills are fixed; candidate fields are looked up by résumé text."""

    def __init__(self, required_skills=None, fields_by_text=None, jd_error=None):
        self.required_skills = required_skills or []
        self.fields_by_text = fields_by_text or {}
        self.jd_error = jd_error
        self.jd_calls = 0
        self.field_calls = 0

    def extract_required_skills(self, job_description: str) -> list[str]:
        self.jd_calls += 1
        if self.jd_error:
            raise self.jd_error
        return list(self.required_skills)

    def extract_candidate_fields(self, resume_text: str) -> CandidateFields:
        self.field_calls += 1
        value = self.fields_by_text.get(resume_text)
        if isinstance(value, Exception):
            raise value
        return value or CandidateFields()


class FakeTextExtractor:
    """Uses the file's bytes as its text."""

    def __init__(self):
        self.calls = 0

    def extract(self, resume) -> str:
        self.calls += 1
        return resume.content.decode("utf-8")


class FakeNotifier:
    def __init__(self, configured=True, result=True, error=None):
        self.configured = configured
        self.result = result
        self.error = error
        self.sent = []

    def is_configured(self) -> bool:
        return self.configured

    def notify(self, candidate, threshold: float) -> bool:
        self.sent.append((candidate.email, candidate.match_score >= threshold))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def store():
    """CandidateStore over a temporary SQLite file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        engine = create_db_engine(f"sqlite:///{os.path.join(tmpdir, 'test.db')}")
        init_db(engine)
        yield CandidateStore(create_session_factory(engine))
        engine.dispose()


@pytest.fixture
def llm_failure():
    return ExternalServiceFailure("model unavailable")
