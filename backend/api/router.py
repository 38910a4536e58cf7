from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_extractor
from config import settings
from models.requests import ExtractRequest, GapRequest, MatchRequest, QuickAnalyzeRequest
from models.responses import AnalysisResponse, HealthResponse
from models.schemas import ExtractedKeywords, GapAnalysis, SkillMatchResult
from services import gap_analyzer, resume_analyzer, skill_matcher
from services.keyword_extractor import KeywordExtractor

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health(extractor: KeywordExtractor = Depends(get_extractor)):
    return HealthResponse(
        status="ok",
        ner_backend=extractor.nlp.model_name if extractor.nlp is not None else "none",
    )


@router.post("/keywords/extract", response_model=ExtractedKeywords)
@limiter.limit(settings.rate_limit)
def extract_keywords(
    request: Request,
    body: ExtractRequest,
    extractor: KeywordExtractor = Depends(get_extractor),
):
    return extractor.extract(body.text, body.options)


@router.post("/skills/match", response_model=SkillMatchResult)
@limiter.limit(settings.rate_limit)
def match_skills(request: Request, body: MatchRequest):
    return skill_matcher.match_skills(body.jd_keywords, body.resume_keywords)


@router.post("/gap/analyze", response_model=GapAnalysis)
@limiter.limit(settings.rate_limit)
def analyze_gap(request: Request, body: GapRequest):
    return gap_analyzer.analyze_gap(
        body.resume_keywords,
        body.jd_keywords,
        body.job_description,
        segment_sections=settings.segment_jd_sections,
    )


@router.post("/analyze/quick", response_model=AnalysisResponse)
@limiter.limit(settings.rate_limit)
def analyze_quick(
    request: Request,
    body: QuickAnalyzeRequest,
    extractor: KeywordExtractor = Depends(get_extractor),
):
    return resume_analyzer.analyze(
        body.resume_text,
        body.job_description,
        extractor,
        options=body.options,
        segment_sections=settings.segment_jd_sections,
    )
