"""Skill matching between job-description and resume keywords.

Each JD keyword is compared against the resume keywords with a tiered
cascade, keeping the highest-confidence verdict:

    exact (100) > synonym (95) > fuzzy (85)

Within a tier the first resume keyword in input order wins. The fuzzy tier
accepts equal, nested ("postgres"/"postgresql") and close-typo forms, so a
separate substring tier (70) can never fire and is not run.
"""

import logging
import math
import re

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from models.schemas.skill_match import (
    MatchType,
    MissingKeywordAnalysis,
    SkillMatch,
    SkillMatchResult,
)
from services.keyword_extractor import SIMILARITY_THRESHOLD, normalize_skill
from services.section_parser import parse_sections

logger = logging.getLogger(__name__)

CONFIDENCE_EXACT = 100
CONFIDENCE_SYNONYM = 95
CONFIDENCE_FUZZY = 85

# ---------------------------------------------------------------------------
# Universal skill synonyms (cross-industry): canonical -> aliases
# ---------------------------------------------------------------------------
SKILL_SYNONYMS: dict[str, list[str]] = {
    # Universal skills
    "communication": ["communicating", "communicate", "verbal", "written communication"],
    "leadership": ["leading", "lead", "management", "supervise", "mentor"],
    "collaboration": ["collaborate", "teamwork", "team player", "cooperative"],
    "problem solving": ["problem-solving", "analytical", "troubleshooting", "critical thinking"],
    "time management": ["prioritization", "organization", "scheduling"],
    "customer service": ["client service", "customer care", "guest services"],
    # Education
    "bachelor": ["bachelors", "bs", "ba", "undergraduate"],
    "master": ["masters", "ms", "ma", "mba", "graduate"],
    "doctorate": ["phd", "doctoral"],
    # Common abbreviations
    "management": ["mgmt", "admin", "administration"],
    "experience": ["exp", "background"],
}

# Reverse lookup, built in table order: a later canonical key overrides an
# earlier alias of the same spelling ("management" maps to itself).
SYNONYM_MAP: dict[str, str] = {}
for _canonical, _aliases in SKILL_SYNONYMS.items():
    SYNONYM_MAP[_canonical] = _canonical
    for _alias in _aliases:
        SYNONYM_MAP[_alias] = _canonical

_NICE_TO_HAVE_RE = re.compile(r"(?:nice to have|preferred|bonus|plus|optional|additional)[\s\S]*")
_REQUIREMENTS_RE = re.compile(r"(?:requirements?|required|must have|qualifications?)[\s\S]*")


def round_half_up(value: float) -> int:
    """Round .5 up; the built-in round() rounds half to even."""
    return math.floor(value + 0.5)


def get_canonical_skill(skill: str) -> str | None:
    """Canonical synonym-table form of a skill, or None if it has no entry."""
    return SYNONYM_MAP.get(normalize_skill(skill))


def _first_similar(normalized_jd: str, normalized_resume: list[str]) -> int | None:
    """Index of the first resume form similar to ``normalized_jd``, or None.

    Same test as ``are_similar_skills``, run on pre-normalized strings with the
    Levenshtein scan batched through rapidfuzz.
    """
    close = next(
        process.extract_iter(
            normalized_jd,
            normalized_resume,
            scorer=Levenshtein.normalized_similarity,
            score_cutoff=SIMILARITY_THRESHOLD,
        ),
        None,
    )
    stop = close[2] if close is not None else len(normalized_resume)

    # A nested form earlier in the list beats the first close typo
    for i in range(stop):
        normalized = normalized_resume[i]
        if normalized in normalized_jd or normalized_jd in normalized:
            return i
    return stop if close is not None else None


def match_skills(jd_keywords: list[str], resume_keywords: list[str]) -> SkillMatchResult:
    """Match job description keywords against resume keywords."""
    matches: list[SkillMatch] = []
    matched: list[str] = []
    missing: list[str] = []

    # Normalize all resume keywords once, indexing the first position of each
    # normalized and canonical form
    normalized_resume = [normalize_skill(kw) for kw in resume_keywords]
    exact_index: dict[str, int] = {}
    synonym_index: dict[str, int] = {}
    for i, normalized in enumerate(normalized_resume):
        exact_index.setdefault(normalized, i)
        canonical = SYNONYM_MAP.get(normalized)
        if canonical:
            synonym_index.setdefault(canonical, i)

    for jd_keyword in jd_keywords:
        normalized_jd = normalize_skill(jd_keyword)
        canonical_jd = SYNONYM_MAP.get(normalized_jd)

        # 1. Exact match (normalized)
        index = exact_index.get(normalized_jd)
        match_type, confidence = MatchType.EXACT, CONFIDENCE_EXACT

        # 2. Canonical match (synonyms)
        if index is None and canonical_jd:
            index = synonym_index.get(canonical_jd)
            match_type, confidence = MatchType.SYNONYM, CONFIDENCE_SYNONYM

        # 3. Fuzzy match (nested or Levenshtein)
        if index is None:
            index = _first_similar(normalized_jd, normalized_resume)
            match_type, confidence = MatchType.FUZZY, CONFIDENCE_FUZZY

        if index is None:
            matches.append(SkillMatch(keyword=jd_keyword))
            missing.append(jd_keyword)
            continue

        matches.append(SkillMatch(
            keyword=jd_keyword,
            matched_to=resume_keywords[index],
            match_type=match_type,
            confidence=confidence,
        ))
        matched.append(jd_keyword)

    match_score = round_half_up(len(matched) / len(jd_keywords) * 100) if jd_keywords else 0

    return SkillMatchResult(
        matches=matches,
        matched_keywords=matched,
        missing_keywords=missing,
        match_score=match_score,
    )


def group_matches_by_type(matches: list[SkillMatch]) -> dict[MatchType, list[SkillMatch]]:
    """Group matches by match type for reporting. Every type is present."""
    grouped: dict[MatchType, list[SkillMatch]] = {t: [] for t in MatchType}
    for match in matches:
        grouped[match.match_type].append(match)
    return grouped


def get_prioritized_missing_keywords(
    missing_keywords: list[str], all_jd_keywords: list[str]
) -> list[str]:
    """Order missing keywords by first position in the JD keyword list.

    Keywords not in the list sort first, as an index of -1 would.
    """
    def _position(kw: str) -> int:
        try:
            return all_jd_keywords.index(kw)
        except ValueError:
            return -1

    return sorted(missing_keywords, key=_position)


def suggest_skills_to_highlight(
    resume_keywords: list[str], jd_keywords: list[str], limit: int = 5
) -> list[str]:
    """JD keywords the resume already covers, worth making prominent."""
    return match_skills(jd_keywords, resume_keywords).matched_keywords[:limit]


def _trailing_sections(lower_jd: str) -> tuple[str, str]:
    """Nice-to-have and requirements sections, each from its first cue to end of text.

    The two ranges overlap when both cues appear, so a requirements section
    followed by a "nice to have" heading still covers the nice-to-have text.
    """
    nice = _NICE_TO_HAVE_RE.search(lower_jd)
    required = _REQUIREMENTS_RE.search(lower_jd)
    return (nice.group(0) if nice else ""), (required.group(0) if required else "")


def _bounded_sections(lower_jd: str) -> tuple[str, str]:
    """Nice-to-have and requirements sections bounded by the next heading."""
    sections = parse_sections(lower_jd)
    return sections.get("preferred", ""), sections.get("requirements", "")


def analyze_missing_keywords(
    missing_keywords: list[str],
    job_description_text: str,
    segment_sections: bool = False,
) -> MissingKeywordAnalysis:
    """Bucket missing keywords into critical / important / nice-to-have.

    - nice-to-have: appears inside the nice-to-have/preferred section
    - critical: repeated in the JD, or inside the requirements section
    - important: everything else
    """
    critical: list[str] = []
    important: list[str] = []
    nice_to_have: list[str] = []

    lower_jd = job_description_text.lower()
    if segment_sections:
        nice_section, required_section = _bounded_sections(lower_jd)
    else:
        nice_section, required_section = _trailing_sections(lower_jd)

    for keyword in missing_keywords:
        lower_keyword = keyword.lower()
        occurrences = lower_jd.count(lower_keyword)

        if nice_section and lower_keyword in nice_section:
            nice_to_have.append(keyword)
        elif occurrences > 1 or (required_section and lower_keyword in required_section):
            critical.append(keyword)
        else:
            important.append(keyword)

    return MissingKeywordAnalysis(
        critical=critical, important=important, nice_to_have=nice_to_have
    )
