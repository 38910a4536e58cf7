from pydantic import BaseModel

from models.schemas.gap_analysis import GapAnalysis, ImprovementPotential
from models.schemas.keywords import ExtractedKeywords, YearsOfExperience


class HealthResponse(BaseModel):
    status: str = "ok"
    ner_backend: str = ""


class AnalysisResponse(BaseModel):
    resume_keywords: ExtractedKeywords = ExtractedKeywords()
    jd_keywords: ExtractedKeywords = ExtractedKeywords()
    gap: GapAnalysis = GapAnalysis()
    improvement: ImprovementPotential = ImprovementPotential(
        current_score=0, potential_score=0, improvement_points=0
    )
    summary: str = ""
    required_years: YearsOfExperience | None = None
