"""Pydantic contracts passed between the extraction, matching and gap stages."""

from models.schemas.keywords import (
    ExtractedKeywords,
    ExtractionOptions,
    KeywordCategory,
    YearsOfExperience,
)
from models.schemas.skill_match import (
    MatchType,
    MissingKeywordAnalysis,
    SkillMatch,
    SkillMatchResult,
)
from models.schemas.gap_analysis import (
    GapAnalysis,
    ImprovementPotential,
    MatchedKeywords,
    Suggestion,
)

__all__ = [
    "ExtractedKeywords",
    "ExtractionOptions",
    "KeywordCategory",
    "YearsOfExperience",
    "MatchType",
    "MissingKeywordAnalysis",
    "SkillMatch",
    "SkillMatchResult",
    "GapAnalysis",
    "ImprovementPotential",
    "MatchedKeywords",
    "Suggestion",
]
