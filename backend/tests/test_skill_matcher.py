import pytest
from pydantic import ValidationError

from models.schemas.skill_match import MatchType, SkillMatch
import services.skill_matcher as skill_matcher
from services.keyword_extractor import KeywordExtractor, are_similar_skills, normalize_skill
from services.skill_matcher import (
    CONFIDENCE_EXACT,
    CONFIDENCE_FUZZY,
    CONFIDENCE_SYNONYM,
    analyze_missing_keywords,
    get_canonical_skill,
    get_prioritized_missing_keywords,
    group_matches_by_type,
    match_skills,
    round_half_up,
    suggest_skills_to_highlight,
)


class TestMatchSkills:
    def test_exact_match_is_case_insensitive(self):
        result = match_skills(["Python"], ["python"])
        match = result.matches[0]
        assert match.match_type is MatchType.EXACT
        assert match.confidence == CONFIDENCE_EXACT
        assert match.matched_to == "python"
        assert result.match_score == 100

    def test_nested_phrase_is_fuzzy(self):
        result = match_skills(["communication"], ["verbal communication skills"])
        match = result.matches[0]
        assert match.match_type is MatchType.FUZZY
        assert match.confidence == CONFIDENCE_FUZZY
        assert match.matched_to == "verbal communication skills"

    def test_typo_is_fuzzy(self):
        match = match_skills(["kubernetes"], ["kubernates"]).matches[0]
        assert match.match_type is MatchType.FUZZY
        assert match.confidence == CONFIDENCE_FUZZY

    def test_synonym_match(self):
        match = match_skills(["leadership"], ["mentor"]).matches[0]
        assert match.match_type is MatchType.SYNONYM
        assert match.confidence == CONFIDENCE_SYNONYM
        assert match.matched_to == "mentor"

    def test_management_is_its_own_canonical(self):
        # "management" is both a leadership alias and a canonical key
        result = match_skills(["leadership"], ["management"])
        assert result.matches[0].match_type is MatchType.NONE
        assert result.missing_keywords == ["leadership"]

    def test_exact_match_wins_over_earlier_partial(self):
        match = match_skills(["python"], ["pythonista", "Python"]).matches[0]
        assert match.match_type is MatchType.EXACT
        assert match.matched_to == "Python"

    def test_equal_confidence_keeps_first_resume_keyword(self):
        forward = match_skills(["communication"], ["communicate", "verbal"]).matches[0]
        backward = match_skills(["communication"], ["verbal", "communicate"]).matches[0]
        assert forward.matched_to == "communicate"
        assert backward.matched_to == "verbal"

    def test_unmatched_keyword(self):
        result = match_skills(["python", "rust"], ["python"])
        assert result.matched_keywords == ["python"]
        assert result.missing_keywords == ["rust"]
        unmatched = result.matches[1]
        assert unmatched.matched_to is None
        assert unmatched.confidence == 0
        assert result.match_score == 50

    def test_one_match_per_jd_keyword(self):
        jd = ["python", "rust", "python"]
        result = match_skills(jd, ["python", "go"])
        assert [m.keyword for m in result.matches] == jd
        assert len(result.matched_keywords) + len(result.missing_keywords) == len(jd)

    def test_empty_inputs_score_zero(self):
        assert match_skills([], ["python"]).match_score == 0
        result = match_skills(["python"], [])
        assert result.match_score == 0
        assert result.missing_keywords == ["python"]

    def test_score_rounds_half_up(self):
        jd = ["python", "java", "rust", "golang", "haskell", "erlang", "cobol", "fortran"]
        # 1/8 = 12.5%
        assert match_skills(jd, ["python"]).match_score == 13

    def test_fuzzy_tier_keeps_first_resume_keyword(self):
        # "kubernates" is a close typo, "kube" and "kubernetes cluster" are nested forms
        assert match_skills(["kubernetes"], ["kubernates", "kube"]).matches[0].matched_to == "kubernates"
        assert match_skills(["kubernetes"], ["kube", "kubernates"]).matches[0].matched_to == "kube"
        assert (
            match_skills(["kubernetes"], ["kubernetes cluster", "kubernates"]).matches[0].matched_to
            == "kubernetes cluster"
        )

    def test_synonym_beats_earlier_fuzzy_candidate(self):
        match = match_skills(["communication"], ["communications team", "verbal"]).matches[0]
        assert match.match_type is MatchType.SYNONYM
        assert match.matched_to == "verbal"


def _pairwise_match(jd_keyword, resume_keywords):
    """Resume-by-resume cascade: (match_type, matched_to) for one JD keyword."""
    best_type, best_to, best_confidence = MatchType.NONE, None, 0
    canonical_jd = get_canonical_skill(jd_keyword)
    for keyword in resume_keywords:
        if normalize_skill(jd_keyword) == normalize_skill(keyword):
            return MatchType.EXACT, keyword
        if canonical_jd and canonical_jd == get_canonical_skill(keyword) and best_confidence < 95:
            best_type, best_to, best_confidence = MatchType.SYNONYM, keyword, 95
        if best_confidence < 85 and are_similar_skills(jd_keyword, keyword):
            best_type, best_to, best_confidence = MatchType.FUZZY, keyword, 85
    return best_type, best_to


RESUME_TERMS = [
    "kubernates", "Postgres", "mentor", "pythonista", "verbal", "Python", "node.js",
    "team player", "admin", "react", "data pipelines", "crm software", "Excel",
]
JD_TERMS = [
    "kubernetes", "PostgreSQL", "leadership", "communication", "python", "React.js",
    "collaboration", "management", "rust", "node", "pipeline", "crm", "excel", "forklift",
]


@pytest.mark.parametrize("resume", [RESUME_TERMS, RESUME_TERMS[::-1]], ids=["forward", "reversed"])
def test_match_skills_agrees_with_pairwise_cascade(resume):
    result = match_skills(JD_TERMS, resume)
    for jd_keyword, match in zip(JD_TERMS, result.matches):
        assert (match.match_type, match.matched_to) == _pairwise_match(jd_keyword, resume)


def _long_text(prefix: str, n_words: int) -> str:
    return " ".join(f"{prefix}{i}" for i in range(n_words))


def test_match_skills_normalizes_each_keyword_once(monkeypatch):
    extractor = KeywordExtractor()
    resume = extractor.extract(_long_text("skill", 1000)).tools
    jd = extractor.extract(_long_text("duty", 1000)).tools
    assert len(resume) > 1000 and len(jd) > 1000

    calls = []
    real = skill_matcher.normalize_skill
    monkeypatch.setattr(skill_matcher, "normalize_skill", lambda s: calls.append(s) or real(s))

    result = match_skills(jd, resume)
    assert len(result.matches) == len(jd)
    # No per-pair normalization: one call per keyword on each side
    assert len(calls) == len(jd) + len(resume)


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(0.5) == 1
    assert round_half_up(12.49) == 12
    assert round_half_up(100) == 100


def test_skill_match_rejects_inconsistent_state():
    with pytest.raises(ValidationError):
        SkillMatch(keyword="python", matched_to="py", match_type=MatchType.NONE)
    with pytest.raises(ValidationError):
        SkillMatch(keyword="python", matched_to=None, match_type=MatchType.EXACT, confidence=100)


@pytest.mark.parametrize(
    "skill,canonical",
    [
        ("MGMT", "management"),
        ("mentor", "leadership"),
        ("management", "management"),
        ("Written Communication", "communication"),
        ("phd", "doctorate"),
        ("kafka", None),
    ],
)
def test_get_canonical_skill(skill, canonical):
    assert get_canonical_skill(skill) == canonical


def test_group_matches_by_type_has_every_type():
    result = match_skills(["python", "java"], ["python"])
    grouped = group_matches_by_type(result.matches)
    assert set(grouped) == set(MatchType)
    assert [m.keyword for m in grouped[MatchType.EXACT]] == ["python"]
    assert [m.keyword for m in grouped[MatchType.NONE]] == ["java"]
    assert grouped[MatchType.SEMANTIC] == []


def test_get_prioritized_missing_keywords():
    # keywords absent from the JD list sort first
    assert get_prioritized_missing_keywords(["c", "a", "z"], ["a", "b", "c"]) == ["z", "a", "c"]


def test_suggest_skills_to_highlight():
    resume = ["Python", "Kafka"]
    jd = ["python", "kafka", "rust"]
    assert suggest_skills_to_highlight(resume, jd) == ["python", "kafka"]
    assert suggest_skills_to_highlight(resume, jd, limit=1) == ["python"]


# --- Severity bucketing ---

NURSING_JD = """Responsibilities:
Deliver patient care and triage. Patient care rounds daily.
Requirements:
Epic charting, BLS certification.
Nice to have: Spanish
"""


def test_analyze_missing_keywords_default():
    result = analyze_missing_keywords(
        ["Epic charting", "Spanish", "wound care", "triage", "patient care"], NURSING_JD
    )
    # "patient care" is repeated, "epic charting" sits under requirements
    assert result.critical == ["Epic charting", "patient care"]
    assert result.important == ["wound care", "triage"]
    assert result.nice_to_have == ["Spanish"]


def test_every_missing_keyword_lands_in_one_bucket():
    missing = ["Epic charting", "Spanish", "wound care", "triage", "patient care"]
    for segment in (False, True):
        result = analyze_missing_keywords(missing, NURSING_JD, segment_sections=segment)
        buckets = result.critical + result.important + result.nice_to_have
        assert sorted(buckets) == sorted(missing)


def test_analyze_missing_keywords_without_headings():
    result = analyze_missing_keywords(["kafka", "rust"], "We use kafka daily. Kafka everywhere.")
    assert result.critical == ["kafka"]
    assert result.important == ["rust"]
    assert result.nice_to_have == []


def test_trailing_section_runs_to_end_of_text():
    jd = "Requirements:\nPython\n\nBenefits:\nGym membership\n"
    default = analyze_missing_keywords(["gym membership"], jd)
    segmented = analyze_missing_keywords(["gym membership"], jd, segment_sections=True)
    assert default.critical == ["gym membership"]
    assert segmented.important == ["gym membership"]


def test_segmented_nice_to_have_stops_at_next_heading():
    jd = "Requirements:\nEpic charting\nNice to have: Spanish\nBenefits:\nPTO\n"
    missing = ["spanish", "pto", "epic charting"]

    default = analyze_missing_keywords(missing, jd)
    assert default.nice_to_have == ["spanish", "pto"]
    assert default.critical == ["epic charting"]

    segmented = analyze_missing_keywords(missing, jd, segment_sections=True)
    assert segmented.nice_to_have == ["spanish"]
    assert segmented.critical == ["epic charting"]
    assert segmented.important == ["pto"]
