"""Shared dependencies for API routes."""

from functools import lru_cache

from config import settings
from services.keyword_extractor import KeywordExtractor
from services.nlp_model import build_nlp_model


@lru_cache(maxsize=1)
def get_extractor() -> KeywordExtractor:
    """Process-wide extractor; the NLP model loads lazily on first request."""
    nlp = build_nlp_model(settings.ner_model, auto_download=settings.nltk_auto_download)
    return KeywordExtractor(nlp=nlp)
