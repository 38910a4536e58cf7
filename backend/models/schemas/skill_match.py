"""Skill Matcher output: per-keyword match verdicts between JD and resume."""

from enum import Enum

from pydantic import BaseModel, model_validator


class MatchType(str, Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    SYNONYM = "synonym"
    SEMANTIC = "semantic"  # reserved, no matching tier produces it yet
    NONE = "none"


class SkillMatch(BaseModel):
    """Best match found in the resume for a single JD keyword."""
    keyword: str
    matched_to: str | None = None  # None if unmatched
    match_type: MatchType = MatchType.NONE
    confidence: int = 0  # 0-100, fixed per match type

    @model_validator(mode="after")
    def _matched_to_iff_matched(self) -> "SkillMatch":
        if (self.matched_to is None) != (self.match_type is MatchType.NONE):
            raise ValueError("matched_to must be set exactly when match_type is not 'none'")
        return self


class SkillMatchResult(BaseModel):
    """Match verdicts for one keyword category (skills, knowledge or tools)."""
    matches: list[SkillMatch] = []
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    match_score: int = 0  # 0-100


class MissingKeywordAnalysis(BaseModel):
    """Unmatched JD keywords bucketed by severity."""
    critical: list[str] = []  # repeated in the JD or under a requirements heading
    important: list[str] = []  # mentioned once
    nice_to_have: list[str] = []  # under a nice-to-have / preferred heading
