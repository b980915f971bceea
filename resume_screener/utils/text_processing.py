"""Text cleanup and skill-list helpers."""

import re

SKILL_SEPARATOR = ", "


def clean_text(raw: str) -> str:
    """Flatten extracted text to a single line with collapsed whitespace."""
    if not raw:
        return ""
    text = re.sub(r"[\r\n]+", " ", raw)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def normalize_skill(skill: str) -> str:
    """Canonical form used for skill comparison."""
    return skill.lower()


def join_skills(skills) -> str:
    """Render a skill collection as the human-readable stored form."""
    return SKILL_SEPARATOR.join(skills)


def split_skills(joined: str | None) -> list[str]:
    """Inverse of join_skills; tolerant of stray spacing."""
    if not joined:
        return []
    return [s.strip() for s in joined.split(",") if s.strip()]
