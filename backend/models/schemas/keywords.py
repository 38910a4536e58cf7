"""Extractor output: categorized keywords pulled from a resume or JD."""

import logging
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class KeywordCategory(str, Enum):
    """Tagged category for a single extracted term.

    ``unclassified`` terms still land in the ``tools`` bucket of
    :class:`ExtractedKeywords`; the tag only keeps them apart from terms
    that actually hit the tool heuristic.
    """
    SKILL = "skill"
    KNOWLEDGE = "knowledge"
    TOOL = "tool"
    REQUIREMENT = "requirement"
    UNCLASSIFIED = "unclassified"


# camelCase keys sent by the web client
_OPTION_ALIASES = {
    "removeDigits": "remove_digits",
    "extractPhrases": "extract_phrases",
    "minLength": "min_length",
}


class ExtractionOptions(BaseModel):
    """Knobs for :meth:`KeywordExtractor.extract`."""
    remove_digits: bool = False
    lowercase: bool = True
    extract_phrases: bool = True
    min_length: int = Field(default=3, ge=1)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "ExtractionOptions":
        """Build options from a loose mapping, never raising.

        Unknown keys are ignored and any value that fails validation falls
        back to that field's default.
        """
        if not raw:
            return cls()
        if not isinstance(raw, Mapping):
            logger.debug("Ignoring non-mapping extraction options: %r", raw)
            return cls()

        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in cls.model_fields:
                continue
            try:
                cls.model_validate({name: value})
            except ValidationError:
                logger.debug("Invalid extraction option %s=%r, using default", key, value)
                continue
            values[name] = value
        return cls.model_validate(values)


class ExtractedKeywords(BaseModel):
    """Keywords bucketed into skills / knowledge / tools / requirements.

    Each bucket is deduplicated and keeps first-seen order. ``raw`` is the
    full normalized candidate list before categorization (diagnostics only),
    and ``categories`` maps each raw term to its tagged category.
    """
    skills: list[str] = []
    knowledge: list[str] = []
    tools: list[str] = []
    requirements: list[str] = []
    raw: list[str] = []
    categories: dict[str, KeywordCategory] = {}


class YearsOfExperience(BaseModel):
    min: int
    max: int | None = None
