"""Keyword extraction for resume and job-description text.

Industry-agnostic: it does not assume tech vocabulary. Candidates come from
four sources, unioned in this order:

1. stopword-delimited keywords and chained phrases
2. nouns / proper nouns from the POS tagger
3. named-entity surface values
4. every bigram and trigram of the token stream

Survivors are lowercased, length-filtered and bucketed by the taxonomy
matcher into skills / knowledge / tools / requirements.
"""

import logging
import re
from typing import Any, Mapping

from nltk.tokenize import RegexpTokenizer
from nltk.util import ngrams
from rapidfuzz.distance import Levenshtein
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from models.schemas.keywords import ExtractedKeywords, ExtractionOptions, YearsOfExperience
from services.nlp_model import NlpModel
from services.taxonomy import ONET_TAXONOMY, Taxonomy, categorize_keywords

logger = logging.getLogger(__name__)

# Tokens keep inner dots, slashes, apostrophes and hyphens plus trailing +/#,
# so "node.js", "ci/cd", "bachelor's", "c++" and "5+" survive as one token.
_TOKENIZER = RegexpTokenizer(r"\w[\w+#]*(?:[./'’-]\w[\w+#]*)*")

# Phrase boundaries for chained keywords: punctuation, bullets, line breaks
# and sentence-ending periods (but not the dot in "node.js").
_FRAGMENT_SPLIT_RE = re.compile(r"[,;:!?()\[\]{}\"|•·▪►\n\r\t]+|\.(?=\s|$)")

_DIGITS_RE = re.compile(r"\d")

# Skill normalization: trailing ".js", then anything but word chars/spaces
_JS_SUFFIX_RE = re.compile(r"\.js\Z")
_NON_WORD_RE = re.compile(r"[^\w\s]")

# Similarity threshold for fuzzy skill matches (normalized Levenshtein)
SIMILARITY_THRESHOLD = 0.8

# Years of experience, tried in order; first match wins
_YEARS_PATTERNS: list[re.Pattern] = [
    re.compile(r"(\d+)\+\s*(years?|yrs?)", re.IGNORECASE),  # "5+ years"
    re.compile(r"(\d+)\s*-\s*(\d+)\s*(years?|yrs?)", re.IGNORECASE),  # "3-5 years"
    re.compile(r"(\d+)\s*to\s*(\d+)\s*(years?|yrs?)", re.IGNORECASE),  # "3 to 5 years"
    re.compile(r"(\d+)\s*(years?|yrs?)", re.IGNORECASE),  # "5 years"
]


def tokenize(text: str) -> list[str]:
    """Split text into word tokens (tech-term aware)."""
    return _TOKENIZER.tokenize(text)


def _stopword_keywords(text: str, options: ExtractionOptions) -> list[str]:
    """Stopword-filtered keywords, optionally chained into phrases.

    Consecutive non-stopword tokens inside one fragment form a phrase, e.g.
    "senior backend engineer with kafka" -> ["senior backend engineer", "kafka"].
    """
    keywords: list[str] = []
    for fragment in _FRAGMENT_SPLIT_RE.split(text):
        run: list[str] = []
        for token in tokenize(fragment):
            if options.remove_digits:
                token = _DIGITS_RE.sub("", token)
                if not any(c.isalpha() for c in token):
                    continue
            if options.lowercase:
                token = token.lower()

            if token.lower() in ENGLISH_STOP_WORDS:
                if run and options.extract_phrases:
                    keywords.append(" ".join(run))
                run = []
                continue

            if options.extract_phrases:
                run.append(token)
            else:
                keywords.append(token)
        if run:
            keywords.append(" ".join(run))
    return keywords


class KeywordExtractor:
    """Extracts categorized keywords using an injected NLP model and taxonomy.

    ``nlp=None`` skips the POS and entity stages entirely, leaving stopword
    keywords and n-grams.
    """

    def __init__(self, nlp: NlpModel | None = None, taxonomy: Taxonomy | None = None) -> None:
        self.nlp = nlp
        self.taxonomy = taxonomy or ONET_TAXONOMY

    def extract(
        self,
        text: str,
        options: ExtractionOptions | Mapping[str, Any] | None = None,
    ) -> ExtractedKeywords:
        """Extract and categorize keywords from ``text``.

        Never raises; empty or non-string input yields empty buckets.
        """
        if not isinstance(options, ExtractionOptions):
            options = ExtractionOptions.from_mapping(options)

        if not isinstance(text, str) or not text.strip():
            return ExtractedKeywords()

        tokens = tokenize(text)

        # Step 1: stopword-delimited keywords
        basic = [kw for kw in _stopword_keywords(text, options) if len(kw) >= options.min_length]

        # Steps 2-3: nouns and named entities
        nouns: list[str] = []
        entities: list[str] = []
        if self.nlp is not None:
            tagged = self.nlp.pos_tag(tokens)
            nouns = [token for token, tag in tagged if tag.startswith("NN")]
            entities = self.nlp.entities(text, tagged)

        # Step 4: n-grams for multi-word phrases
        bigrams = [" ".join(g) for g in ngrams(tokens, 2)]
        trigrams = [" ".join(g) for g in ngrams(tokens, 3)]

        # Step 5: union, normalize, length filter (first-seen order)
        candidates = dict.fromkeys([*basic, *nouns, *entities, *bigrams, *trigrams])
        normalized = dict.fromkeys(
            kw for kw in (c.strip().lower() for c in candidates) if len(kw) >= options.min_length
        )

        # Step 6: taxonomy categorization
        result = categorize_keywords(list(normalized), self.taxonomy)
        logger.debug(
            "Extracted %d terms: %d skills, %d knowledge, %d tools, %d requirements",
            len(result.raw), len(result.skills), len(result.knowledge),
            len(result.tools), len(result.requirements),
        )
        return result


def extract_keywords(
    text: str,
    options: ExtractionOptions | Mapping[str, Any] | None = None,
    nlp: NlpModel | None = None,
    taxonomy: Taxonomy | None = None,
) -> ExtractedKeywords:
    """One-shot extraction with a throwaway :class:`KeywordExtractor`."""
    return KeywordExtractor(nlp=nlp, taxonomy=taxonomy).extract(text, options)


def extract_years_of_experience(text: str) -> YearsOfExperience | None:
    """Parse a years-of-experience requirement.

    "5+ years" -> min=5, max=None; "3-5 years" / "3 to 5 years" -> min=3, max=5.
    The first pattern that matches wins.
    """
    for pattern in _YEARS_PATTERNS:
        match = pattern.search(text)
        if match:
            if match.group(2).isdigit():
                return YearsOfExperience(min=int(match.group(1)), max=int(match.group(2)))
            return YearsOfExperience(min=int(match.group(1)))
    return None


def normalize_skill(skill: str) -> str:
    """Normalize a skill name for comparison: "React.js" -> "react"."""
    skill = _JS_SUFFIX_RE.sub("", skill.lower())
    skill = _NON_WORD_RE.sub("", skill)
    return skill.strip()


def similar_normalized(normalized1: str, normalized2: str) -> bool:
    """:func:`are_similar_skills` for strings already passed through normalize_skill."""
    if normalized1 == normalized2:
        return True

    if normalized1 in normalized2 or normalized2 in normalized1:
        return True

    # 1 - distance / max(len1, len2)
    return Levenshtein.normalized_similarity(
        normalized1, normalized2, score_cutoff=SIMILARITY_THRESHOLD
    ) >= SIMILARITY_THRESHOLD


def are_similar_skills(skill1: str, skill2: str) -> bool:
    """Check if two skills are the same, nested ("postgres"/"postgresql") or close typos."""
    return similar_normalized(normalize_skill(skill1), normalize_skill(skill2))
