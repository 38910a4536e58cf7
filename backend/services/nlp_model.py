"""NLP backends for the keyword extractor: POS tagging and named entities.

A model instance is built by the caller and handed to ``KeywordExtractor``;
nothing here is a module-level singleton. Every backend degrades to empty
results (with a warning) when its data or weights are unavailable.
"""

import logging
import re
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

# NLTK data packages needed by NltkModel
NLTK_PACKAGES = ("averaged_perceptron_tagger_eng", "maxent_ne_chunker_tab", "words")


class NlpModel(ABC):
    """Base class for POS/NER backends.

    Subclasses must implement:
        - load(): load weights/data into memory
        - pos_tag(tokens): Penn Treebank (token, tag) pairs
        - entities(text, tagged): entity surface strings
    """

    model_name: str = ""
    _loaded: bool = False

    @abstractmethod
    def load(self) -> None:
        """Load model weights/data. Called once by ensure_loaded()."""

    @abstractmethod
    def pos_tag(self, tokens: list[str]) -> list[tuple[str, str]]:
        """Tag tokens with Penn Treebank POS tags."""

    @abstractmethod
    def entities(self, text: str, tagged: list[tuple[str, str]]) -> list[str]:
        """Return named-entity surface values found in text."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load model if not already loaded."""
        if not self._loaded:
            logger.info("Loading NLP model: %s", self.model_name)
            self.load()
            self._loaded = True
            logger.info("NLP model loaded: %s", self.model_name)


class NltkModel(NlpModel):
    """Averaged perceptron POS tagger + NLTK's maxent NE chunker."""

    model_name = "nltk"

    def __init__(self, auto_download: bool = False) -> None:
        self.auto_download = auto_download
        self._tagger = None
        self._chunker_ok = False

    def load(self) -> None:
        if self.auto_download:
            self._download()

        try:
            from nltk.tag.perceptron import PerceptronTagger

            self._tagger = PerceptronTagger()
        except Exception as e:
            logger.warning("NLTK POS tagger unavailable, nouns will be skipped: %s", e)

        try:
            import nltk

            nltk.ne_chunk([("Probe", "NNP")])
            self._chunker_ok = True
        except Exception as e:
            logger.warning("NLTK NE chunker unavailable, entities will be skipped: %s", e)

    def _download(self) -> None:
        import nltk

        for package in NLTK_PACKAGES:
            try:
                nltk.download(package, quiet=True)
            except Exception as e:
                logger.warning("Failed to download NLTK package %s: %s", package, e)

    def pos_tag(self, tokens: list[str]) -> list[tuple[str, str]]:
        self.ensure_loaded()
        if self._tagger is None or not tokens:
            return []
        try:
            return self._tagger.tag(tokens)
        except Exception as e:
            logger.warning("POS tagging failed: %s", e)
            return []

    def entities(self, text: str, tagged: list[tuple[str, str]]) -> list[str]:
        self.ensure_loaded()
        if not self._chunker_ok or not tagged:
            return []
        try:
            import nltk

            tree = nltk.ne_chunk(tagged)
            return [
                " ".join(token for token, _ in subtree.leaves())
                for subtree in tree
                if isinstance(subtree, nltk.Tree)
            ]
        except Exception as e:
            logger.warning("NLTK entity chunking failed: %s", e)
            return []


def _chunk_for_ner(text: str, max_words: int = 300) -> list[str]:
    """Split text into chunks that fit within BERT's 512 token limit."""
    paragraphs = re.split(r"\n\n+", text.strip())
    chunks: list[str] = []
    current: list[str] = []
    current_words = 0
    for para in paragraphs:
        para = para.strip()
        if not para:
            continue
        pw = len(para.split())
        if current_words + pw > max_words and current:
            chunks.append("\n\n".join(current))
            current = [para]
            current_words = pw
        else:
            current.append(para)
            current_words += pw
    if current:
        chunks.append("\n\n".join(current))
    return chunks or [text[:2000]]


class TransformersNerModel(NltkModel):
    """NLTK POS tagging with a Hugging Face token-classification model for entities."""

    model_name = "transformers"

    def __init__(self, ner_model: str, auto_download: bool = False, min_score: float = 0.5) -> None:
        super().__init__(auto_download=auto_download)
        self.ner_model = ner_model
        self.min_score = min_score
        self._ner = None

    def load(self) -> None:
        super().load()
        try:
            from transformers import pipeline

            self._ner = pipeline(
                "token-classification",
                model=self.ner_model,
                aggregation_strategy="simple",
            )
            logger.info("NER model %s loaded successfully", self.ner_model)
        except Exception as e:
            logger.warning("Failed to load NER model %s: %s", self.ner_model, e)

    def entities(self, text: str, tagged: list[tuple[str, str]]) -> list[str]:
        self.ensure_loaded()
        if self._ner is None or not text.strip():
            return []

        found: list[str] = []
        try:
            for chunk in _chunk_for_ner(text):
                for r in self._ner(chunk):
                    if r["score"] < self.min_score:
                        continue
                    # Clean up subword artifacts
                    word = re.sub(r"\s*##\s*", "", r["word"]).strip()
                    if word:
                        found.append(word)
        except Exception as e:
            logger.warning("NER extraction failed: %s", e)
            return []
        return found


def build_nlp_model(ner_model: str = "", auto_download: bool = False) -> NlpModel:
    """Pick the NLP backend: HF NER when a model id is configured, else NLTK."""
    if ner_model:
        return TransformersNerModel(ner_model, auto_download=auto_download)
    return NltkModel(auto_download=auto_download)
