"""Skill overlap scoring between job-description and candidate skills."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from resume_screener.utils.text_processing import normalize_skill

logger = logging.getLogger("resume_screener.matching")


@dataclass(frozen=True)
class SkillMatch:
    """Lower-cased skills found on both sides, and the percentage score."""

    matched: frozenset[str] = field(default_factory=frozenset)
    score: float = 0.0

    def sorted_matches(self) -> list[str]:
        return sorted(self.matched)


def match_skills(required_skills: Iterable[str], candidate_skills: Iterable[str]) -> SkillMatch:
    """Score candidate skills against the required skills.

    Comparison is case-insensitive exact equality; duplicates on either side
    count once. The score is the share of distinct required skills present,
    as a percentage, and is 0.0 when nothing is required. Skills the candidate
    has beyond the requirements do not affect the score.
    """
    required = {normalize_skill(s) for s in required_skills}
    candidate = {normalize_skill(s) for s in candidate_skills}

    matched = required & candidate
    score = 0.0 if not required else (len(matched) / len(required)) * 100.0

    logger.debug("Matched %d/%d required skills (%.1f%%)", len(matched), len(required), score)
    return SkillMatch(frozenset(matched), score)
