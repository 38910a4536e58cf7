"""Orchestrator: resume + JD text in, full gap report out.

Pipeline:
1. Keyword extraction for both texts (shared extractor / NLP model)
2. Skill matching per category + severity bucketing (gap analyzer)
3. Improvement potential and summary line
4. Years-of-experience requirement from the JD
"""

import logging
from typing import Any, Mapping

from models.responses import AnalysisResponse
from models.schemas.keywords import ExtractionOptions
from services.gap_analyzer import analyze_gap, calculate_improvement_potential, get_gap_summary
from services.keyword_extractor import KeywordExtractor, extract_years_of_experience

logger = logging.getLogger(__name__)


def analyze(
    resume_text: str,
    job_description: str,
    extractor: KeywordExtractor,
    options: ExtractionOptions | Mapping[str, Any] | None = None,
    segment_sections: bool = False,
) -> AnalysisResponse:
    """Run the full extraction -> matching -> gap analysis pipeline."""
    resume_keywords = extractor.extract(resume_text, options)
    jd_keywords = extractor.extract(job_description, options)

    gap = analyze_gap(
        resume_keywords, jd_keywords, job_description, segment_sections=segment_sections
    )
    improvement = calculate_improvement_potential(gap)

    logger.info(
        "Analysis complete: score=%d potential=%d critical=%d",
        improvement.current_score,
        improvement.potential_score,
        len(gap.missing_keywords.critical),
    )

    return AnalysisResponse(
        resume_keywords=resume_keywords,
        jd_keywords=jd_keywords,
        gap=gap,
        improvement=improvement,
        summary=get_gap_summary(gap),
        required_years=extract_years_of_experience(job_description),
    )
