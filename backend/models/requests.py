from pydantic import BaseModel, Field

from config import settings
from models.schemas.keywords import ExtractedKeywords


class ExtractRequest(BaseModel):
    text: str = Field(..., max_length=settings.max_text_length, description="Resume or JD text")
    options: dict | None = Field(None, description="Extraction options; invalid values fall back to defaults")


class MatchRequest(BaseModel):
    jd_keywords: list[str] = Field(..., description="Job description keywords to be matched")
    resume_keywords: list[str] = Field(..., description="Resume keywords to match against")


class GapRequest(BaseModel):
    resume_keywords: ExtractedKeywords
    jd_keywords: ExtractedKeywords
    job_description: str = Field(..., max_length=settings.max_text_length)


class QuickAnalyzeRequest(BaseModel):
    resume_text: str = Field(..., max_length=settings.max_text_length, description="Plain text resume content")
    job_description: str = Field(..., max_length=settings.max_text_length, description="Job description text")
    options: dict | None = None
