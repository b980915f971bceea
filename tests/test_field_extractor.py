"""Tests for LLM field extraction and response parsing."""

import pytest

from resume_screener.errors import ExternalServiceFailure
from resume_screener.llm.field_extractor import (
    FieldExtractor,
    parse_candidate_fields,
    parse_skill_list,
    strip_markdown,
)

from conftest import FakeLLMClient


class TestStripMarkdown:
    def test_removes_emphasis_and_bullets(self):
        text = "**Name:** Jane\n- *Email*: jane@example.com\n# Skills: Python"
        assert strip_markdown(text) == "Name: Jane\nEmail: jane@example.com\nSkills: Python"

    def test_removes_backticks(self):
        assert strip_markdown("`Python`, `SQL`") == "Python, SQL"


class TestParseSkillList:
    def test_comma_separated(self):
        assert parse_skill_list("Python, SQL, Docker") == ["Python", "SQL", "Docker"]

    def test_drops_label(self):
        assert parse_skill_list("Required skills: Python, AWS.") == ["Python", "AWS"]

    def test_bulleted_lines(self):
        response = "- Python\n- Machine Learning\n- SQL"
        assert parse_skill_list(response) == ["Python", "Machine Learning", "SQL"]

    def test_numbered_lines(self):
        assert parse_skill_list("1. Python\n2) Go") == ["Python", "Go"]

    def test_keeps_leading_dot(self):
        assert parse_skill_list(".NET, C#") == [".NET", "C#"]

    def test_empty_response(self):
        assert parse_skill_list("") == []


class TestParseCandidateFields:
    def test_plain_lines(self):
        fields = parse_candidate_fields(
            "Name: Jane Doe\nEmail: jane@example.com\nSkills: Python, SQL"
        )
        assert fields.name == "Jane Doe"
        assert fields.email == "jane@example.com"
        assert fields.skills == ["Python", "SQL"]
        assert fields.is_complete

    def test_markdown_reply(self):
        fields = parse_candidate_fields(
            "**Full Name:** Jane Doe\n**E-mail:** <jane@example.com>\n**Skills:** Python, SQL"
        )
        assert fields.name == "Jane Doe"
        assert fields.email == "jane@example.com"
        assert fields.skills == ["Python", "SQL"]

    def test_missing_email_is_incomplete(self):
        fields = parse_candidate_fields("Name: Jane Doe\nSkills: Python")
        assert fields.email == ""
        assert not fields.is_complete

    def test_first_label_wins(self):
        fields = parse_candidate_fields("Name: Jane\nName: Other")
        assert fields.name == "Jane"

    def test_no_skills_line(self):
        fields = parse_candidate_fields("Name: Jane\nEmail: j@x.io")
        assert fields.skills == []


class TestFieldExtractor:
    def test_required_skills_prompt_contains_jd(self):
        client = FakeLLMClient("Python, SQL")
        skills = FieldExtractor(client).extract_required_skills("We need Python and SQL")
        assert skills == ["Python", "SQL"]
        assert "We need Python and SQL" in client.prompts[0]

    def test_candidate_fields(self):
        client = FakeLLMClient("Name: Ann Lee\nEmail: ann@example.com\nSkills: Go, Rust")
        fields = FieldExtractor(client).extract_candidate_fields("resume text here")
        assert fields.name == "Ann Lee"
        assert fields.skills == ["Go", "Rust"]
        assert "resume text here" in client.prompts[0]

    def test_service_failure_propagates(self, llm_failure):
        client = FakeLLMClient(llm_failure)
        with pytest.raises(ExternalServiceFailure):
            FieldExtractor(client).extract_required_skills("jd")

    def test_unexpected_error_wrapped(self):
        client = FakeLLMClient(RuntimeError("boom"))
        with pytest.raises(ExternalServiceFailure, match="boom"):
            FieldExtractor(client).extract_candidate_fields("text")
