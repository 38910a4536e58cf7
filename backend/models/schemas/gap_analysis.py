"""Gap Analyzer output: scores, severity-bucketed gaps and suggestions."""

from typing import Literal

from pydantic import BaseModel

from models.schemas.skill_match import MissingKeywordAnalysis, SkillMatch

SuggestionType = Literal[
    "add_keyword", "emphasize_skill", "reorder_skills", "add_experience", "reframe_bullet"
]
Priority = Literal["critical", "important", "nice-to-have"]
ResumeSection = Literal["summary", "experience", "skills", "certifications"]

PRIORITY_ORDER: dict[str, int] = {"critical": 0, "important": 1, "nice-to-have": 2}


class Suggestion(BaseModel):
    type: SuggestionType
    priority: Priority
    description: str
    keywords: list[str] | None = None
    section: ResumeSection | None = None


class MatchedKeywords(BaseModel):
    """Successful matches per category."""
    skills: list[SkillMatch] = []
    knowledge: list[SkillMatch] = []
    tools: list[SkillMatch] = []


class GapAnalysis(BaseModel):
    """Full resume vs. JD gap report.

    ``suggestions`` is ordered critical -> important -> nice-to-have, keeping
    generation order within a priority. ``skills_to_emphasize`` and
    ``skills_to_deemphasize`` hold resume-side terms, at most 5 each.
    """
    overall_match_score: int = 0
    skills_match_score: int = 0
    knowledge_match_score: int = 0
    tools_match_score: int = 0
    matched_keywords: MatchedKeywords = MatchedKeywords()
    missing_keywords: MissingKeywordAnalysis = MissingKeywordAnalysis()
    suggestions: list[Suggestion] = []
    skills_to_emphasize: list[str] = []
    skills_to_deemphasize: list[str] = []


class ImprovementPotential(BaseModel):
    current_score: int
    potential_score: int
    improvement_points: int
