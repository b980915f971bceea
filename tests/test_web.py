"""Tests for the FastAPI web app."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from resume_screener.config import AppConfig
from resume_screener.llm.field_extractor import CandidateFields
from resume_screener.models import Candidate
from resume_screener.screening.pipeline import ScreeningPipeline
from resume_screener.screening.service import ScreeningService
from resume_screener.web.app import create_app

from conftest import FakeFieldExtractor, FakeNotifier, FakeTextExtractor


@pytest.fixture
def extractor():
    return FakeFieldExtractor(
        ["python", "sql"],
        {
            "alice": CandidateFields(name="Alice", email="alice@example.com", skills=["Python"]),
            "bob": CandidateFields(name="Bob", email="bob@example.com", skills=["python", "SQL"]),
        },
    )


@pytest.fixture
def service(store, extractor):
    pipeline = ScreeningPipeline(
        field_extractor=extractor,
        text_extractor=FakeTextExtractor(),
        store=store,
        notifier=FakeNotifier(configured=False),
        threshold=60.0,
    )
    return ScreeningService(pipeline, store, threshold=60.0)


@pytest.fixture
def client(service):
    return TestClient(create_app(AppConfig(), service=service))


def upload(client, job_description="Need Python and SQL", files=None):
    if files is None:
        files = [
            ("resume_files", ("alice.pdf", b"alice", "application/pdf")),
            ("resume_files", ("bob.pdf", b"bob", "application/pdf")),
        ]
    return client.post("/upload", data={"job_description": job_description}, files=files)


class TestPages:
    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Screen resumes" in response.text

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.text == "Resume Screener is running"


class TestUpload:
    def test_upload_redirects_to_ranked_results(self, client):
        response = upload(client)
        assert response.status_code == 200
        assert response.url.path == "/results"
        assert "Successfully processed 2 resumes" in response.text
        assert response.text.index("Bob") < response.text.index("Alice")

    def test_batch_runs_off_the_event_loop(self, client, service, monkeypatch):
        loops = []
        process = service.process_resumes

        def recording_process(job_description, files):
            try:
                loops.append(asyncio.get_running_loop())
            except RuntimeError:
                loops.append(None)
            return process(job_description, files)

        monkeypatch.setattr(service, "process_resumes", recording_process)
        response = upload(client)

        assert response.url.path == "/results"
        assert loops == [None]

    def test_skipped_files_reported(self, client):
        files = [
            ("resume_files", ("bob.pdf", b"bob", "application/pdf")),
            ("resume_files", ("notes.txt", b"hello", "text/plain")),
        ]
        response = upload(client, files=files)
        assert "Successfully processed 1 resumes (1 skipped)" in response.text

    def test_missing_job_description(self, client, extractor):
        response = upload(client, job_description="  ")
        assert response.url.path == "/"
        assert "Job description is required" in response.text
        assert extractor.jd_calls == 0

    def test_no_files(self, client):
        response = client.post("/upload", data={"job_description": "Need Python"})
        assert response.url.path == "/"
        assert "At least one resume file is required" in response.text

    def test_nothing_processed_warns(self, client):
        files = [("resume_files", ("nobody.pdf", b"nobody", "application/pdf"))]
        response = upload(client, files=files)
        assert response.url.path == "/"
        assert "No candidates could be processed" in response.text

    def test_llm_failure_flashes_error(self, client, extractor, llm_failure):
        extractor.jd_error = llm_failure
        response = upload(client)
        assert response.url.path == "/"
        assert "An error occurred while processing resumes" in response.text


class TestApi:
    def test_stats(self, client):
        upload(client)
        assert client.get("/api/stats").json() == {
            "total": 2,
            "qualified": 1,
            "emails_sent": 0,
            "average_score": 75.0,
        }

    def test_candidate_details(self, client, store):
        saved = store.save(Candidate(name="Carol", email="carol@example.com", match_score=42.0))
        data = client.get(f"/api/candidates/{saved.id}").json()
        assert data["name"] == "Carol"
        assert data["match_score"] == 42.0

    def test_candidate_not_found(self, client):
        response = client.get("/api/candidates/12345")
        assert response.status_code == 404
        assert response.json() == {"error": "Candidate not found"}


class TestCsvDownload:
    def test_empty_returns_400(self, client):
        response = client.get("/download-csv")
        assert response.status_code == 400

    def test_download(self, client):
        upload(client)
        response = client.get("/download-csv")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=\"candidate_rankings_" in response.headers["content-disposition"]
        assert "RESUME SCREENING SUMMARY" in response.text


class TestClear:
    def test_clear_removes_candidates(self, client, store):
        upload(client)
        response = client.post("/clear")
        assert response.url.path == "/"
        assert "All candidate data cleared successfully" in response.text
        assert store.find_all() == []
