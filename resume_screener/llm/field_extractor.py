"""LLM-backed extraction of candidate fields and required skills.

The model is asked for plain labelled lines::

    Name: <full name>
    Email: <email address>
    Skills: <comma-separated skills>

Models still sprinkle markdown emphasis and bullets into their replies, so
every response is passed through strip_markdown before parsing.
"""

import logging
import re
from dataclasses import dataclass, field

from resume_screener.errors import ExternalServiceFailure
from resume_screener.llm.clients import LLMClient

logger = logging.getLogger("resume_screener.llm.fields")

JD_SKILLS_PROMPT = (
    "Extract only the list of required skills from the following job description:\n\n"
    "{job_description}"
    "\n\nReturn skills as a comma-separated list."
)

CANDIDATE_FIELDS_PROMPT = (
    "Extract the following from the resume text below in plain text only, "
    "without adding asterisks, bullet points, or markdown formatting. "
    "Return exactly in this format:\n"
    "Name: <full name>\n"
    "Email: <email address>\n"
    "Skills: <comma-separated skills>\n\n"
    "Resume:\n"
    "{resume_text}"
)

_LABEL_LINE = re.compile(r"^\s*(?:full\s+)?(name|email|e-mail|skills)\s*:\s*(.*)$", re.IGNORECASE)
_LINE_MARKER = re.compile(r"^\s*(?:#{1,6}|[-•]|\d+[.)])\s+")
_ITEM_NOISE = " \t-•;\"'"


@dataclass
class CandidateFields:
    """Structured fields pulled out of a résumé."""

    name: str = ""
    email: str = ""
    skills: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.email)


def strip_markdown(text: str) -> str:
    """Drop emphasis markers, backticks and leading heading/bullet markers."""
    text = re.sub(r"\*+", "", text)
    text = text.replace("`", "")
    lines = [_LINE_MARKER.sub("", line) for line in text.splitlines()]
    return "\n".join(lines).strip()


def parse_skill_list(response: str) -> list[str]:
    """Parse a comma- or newline-separated skill list.

    Anything up to the last colon is treated as a label ("Required skills:").
    """
    text = strip_markdown(response)
    if ":" in text:
        text = text[text.rindex(":") + 1:]

    skills = []
    for item in re.split(r"[,\n]", text):
        skill = _LINE_MARKER.sub("", item).strip(_ITEM_NOISE).removesuffix(".")
        if skill:
            skills.append(skill)
    return skills


def parse_candidate_fields(response: str) -> CandidateFields:
    """Parse Name/Email/Skills labelled lines. Missing labels give empty values."""
    values: dict[str, str] = {}
    for line in strip_markdown(response).splitlines():
        match = _LABEL_LINE.match(line)
        if not match:
            continue
        label = match.group(1).lower().replace("-", "")
        # First occurrence wins
        values.setdefault(label, match.group(2).strip())

    skills_raw = values.get("skills", "")
    return CandidateFields(
        name=values.get("name", ""),
        email=values.get("email", "").strip("<>"),
        skills=parse_skill_list(skills_raw) if skills_raw else [],
    )


class FieldExtractor:
    """Prompt/response contract around an injected LLMClient."""

    def __init__(self, client: LLMClient):
        self.client = client

    def _ask(self, prompt: str) -> str:
        try:
            return self.client.complete(prompt)
        except ExternalServiceFailure:
            raise
        except Exception as e:
            raise ExternalServiceFailure(f"Language model call failed: {e}") from e

    def extract_required_skills(self, job_description: str) -> list[str]:
        response = self._ask(JD_SKILLS_PROMPT.format(job_description=job_description))
        skills = parse_skill_list(response)
        logger.info("Extracted %d skills from job description: %s", len(skills), skills)
        return skills

    def extract_candidate_fields(self, resume_text: str) -> CandidateFields:
        response = self._ask(CANDIDATE_FIELDS_PROMPT.format(resume_text=resume_text))
        fields = parse_candidate_fields(response)
        logger.debug(
            "Extracted fields: name=%r email=%r (%d skills)",
            fields.name, fields.email, len(fields.skills),
        )
        return fields
