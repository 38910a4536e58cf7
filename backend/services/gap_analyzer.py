"""Gap analysis between resume and job-description keywords.

Matches skills, knowledge and tools independently, combines the three
scores with fixed weights, buckets what's missing by severity and turns
the result into template-based suggestions.
"""

import logging

from models.schemas.gap_analysis import (
    PRIORITY_ORDER,
    GapAnalysis,
    ImprovementPotential,
    MatchedKeywords,
    Suggestion,
)
from models.schemas.keywords import ExtractedKeywords
from models.schemas.skill_match import MatchType, MissingKeywordAnalysis, SkillMatchResult
from services.skill_matcher import analyze_missing_keywords, match_skills, round_half_up

logger = logging.getLogger(__name__)

# Weights for the overall score
W_SKILLS = 0.40  # universal skills
W_KNOWLEDGE = 0.35  # knowledge areas, i.e. industry fit
W_TOOLS = 0.25  # specific tools / software / equipment

MAX_CRITICAL_SUGGESTIONS = 3
MAX_BUNDLED_KEYWORDS = 3
MAX_REORDER_KEYWORDS = 5
MAX_EMPHASIZE = 5
MAX_DEEMPHASIZE = 5


def calculate_weighted_match_score(scores: dict[str, int]) -> int:
    """Weighted 0-100 score from per-category 'skills'/'knowledge'/'tools' scores."""
    return round_half_up(
        scores["skills"] * W_SKILLS
        + scores["knowledge"] * W_KNOWLEDGE
        + scores["tools"] * W_TOOLS
    )


def analyze_gap(
    resume_keywords: ExtractedKeywords,
    jd_keywords: ExtractedKeywords,
    job_description_text: str,
    segment_sections: bool = False,
) -> GapAnalysis:
    """Analyze the gap between a resume and a job description."""
    skills_match = match_skills(jd_keywords.skills, resume_keywords.skills)
    knowledge_match = match_skills(jd_keywords.knowledge, resume_keywords.knowledge)
    tools_match = match_skills(jd_keywords.tools, resume_keywords.tools)

    overall = calculate_weighted_match_score({
        "skills": skills_match.match_score,
        "knowledge": knowledge_match.match_score,
        "tools": tools_match.match_score,
    })

    all_missing = [
        *skills_match.missing_keywords,
        *knowledge_match.missing_keywords,
        *tools_match.missing_keywords,
    ]
    missing = analyze_missing_keywords(
        all_missing, job_description_text, segment_sections=segment_sections
    )

    suggestions = _generate_suggestions(skills_match, tools_match, missing, jd_keywords)

    logger.debug(
        "Gap analysis: overall=%d skills=%d knowledge=%d tools=%d missing=%d",
        overall, skills_match.match_score, knowledge_match.match_score,
        tools_match.match_score, len(all_missing),
    )

    return GapAnalysis(
        overall_match_score=overall,
        skills_match_score=skills_match.match_score,
        knowledge_match_score=knowledge_match.match_score,
        tools_match_score=tools_match.match_score,
        matched_keywords=MatchedKeywords(
            skills=[m for m in skills_match.matches if m.matched_to is not None],
            knowledge=[m for m in knowledge_match.matches if m.matched_to is not None],
            tools=[m for m in tools_match.matches if m.matched_to is not None],
        ),
        missing_keywords=missing,
        suggestions=suggestions,
        skills_to_emphasize=_skills_to_emphasize(skills_match, knowledge_match, tools_match),
        skills_to_deemphasize=_skills_to_deemphasize(resume_keywords, jd_keywords),
    )


def _generate_suggestions(
    skills_match: SkillMatchResult,
    tools_match: SkillMatchResult,
    missing: MissingKeywordAnalysis,
    jd_keywords: ExtractedKeywords,
) -> list[Suggestion]:
    """Template suggestions, sorted critical -> important -> nice-to-have (stable)."""
    suggestions: list[Suggestion] = []

    for keyword in missing.critical[:MAX_CRITICAL_SUGGESTIONS]:
        suggestions.append(Suggestion(
            type="add_keyword",
            priority="critical",
            description=f'Incorporate "{keyword}" into your experience bullets',
            keywords=[keyword],
            section="experience",
        ))

    if missing.important:
        important = missing.important[:MAX_BUNDLED_KEYWORDS]
        suggestions.append(Suggestion(
            type="add_keyword",
            priority="important",
            description=f"Add these to your resume: {', '.join(important)}",
            keywords=important,
            section="skills",
        ))

    # Matched through a synonym/fuzzy tier: the resume has it, worded differently
    not_prominent = [
        m.keyword
        for m in (*skills_match.matches, *tools_match.matches)
        if m.match_type not in (MatchType.EXACT, MatchType.NONE)
    ][:MAX_BUNDLED_KEYWORDS]
    if not_prominent:
        suggestions.append(Suggestion(
            type="emphasize_skill",
            priority="important",
            description=f"Emphasize these matched skills: {', '.join(not_prominent)}",
            keywords=not_prominent,
            section="summary",
        ))

    if jd_keywords.skills or jd_keywords.tools:
        suggestions.append(Suggestion(
            type="reorder_skills",
            priority="nice-to-have",
            description="Reorder your skills section to prioritize JD keywords",
            keywords=[*jd_keywords.skills, *jd_keywords.tools][:MAX_REORDER_KEYWORDS],
            section="skills",
        ))

    missing_jd_skills = [kw for kw in missing.critical if kw in jd_keywords.skills]
    if missing_jd_skills:
        suggestions.append(Suggestion(
            type="reframe_bullet",
            priority="important",
            description="Reframe experience bullets to highlight relevant skills",
            keywords=missing_jd_skills,
            section="experience",
        ))

    return sorted(suggestions, key=lambda s: PRIORITY_ORDER[s.priority])


def _skills_to_emphasize(*results: SkillMatchResult) -> list[str]:
    """Resume terms reached through synonym/fuzzy matches: present, but not explicit."""
    to_emphasize: dict[str, None] = {}
    for result in results:
        for match in result.matches:
            if match.matched_to is not None and match.match_type is not MatchType.EXACT:
                to_emphasize[match.matched_to] = None
    return list(to_emphasize)[:MAX_EMPHASIZE]


def _skills_to_deemphasize(
    resume_keywords: ExtractedKeywords, jd_keywords: ExtractedKeywords
) -> list[str]:
    """Resume skills/tools with no substring overlap with any JD term."""
    jd_terms = [
        kw.lower()
        for kw in dict.fromkeys([*jd_keywords.skills, *jd_keywords.knowledge, *jd_keywords.tools])
    ]

    to_deemphasize: list[str] = []
    for resume_keyword in [*resume_keywords.skills, *resume_keywords.tools]:
        lower = resume_keyword.lower()
        if not any(lower in jd or jd in lower for jd in jd_terms):
            to_deemphasize.append(resume_keyword)

    return to_deemphasize[:MAX_DEEMPHASIZE]


def calculate_improvement_potential(analysis: GapAnalysis) -> ImprovementPotential:
    """Estimate how far the score could rise by closing the reported gaps."""
    current = analysis.overall_match_score

    critical_boost = min(len(analysis.missing_keywords.critical) * 10, 30)
    important_boost = min(len(analysis.missing_keywords.important) * 5, 15)
    emphasize_boost = 5 if analysis.skills_to_emphasize else 0

    potential = min(current + critical_boost + important_boost + emphasize_boost, 100)
    return ImprovementPotential(
        current_score=current,
        potential_score=potential,
        improvement_points=potential - current,
    )


def get_gap_summary(analysis: GapAnalysis) -> str:
    """One-line, human-readable verdict for the gap analysis."""
    potential = calculate_improvement_potential(analysis)
    current = potential.current_score
    n_critical = len(analysis.missing_keywords.critical)

    if current >= 90:
        return f"Excellent match! Your resume aligns {current}% with this job."
    if current >= 70:
        return (
            f"Good match ({current}%). Adding {n_critical} critical keywords "
            f"could boost to {potential.potential_score}%."
        )
    if current >= 50:
        return (
            f"Fair match ({current}%). Focus on {n_critical} critical gaps "
            f"for +{potential.improvement_points}% improvement."
        )
    return f"Low match ({current}%). This position may require significant resume tailoring."
