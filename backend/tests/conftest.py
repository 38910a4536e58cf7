"""Shared test configuration, pytest markers and stub NLP models."""

import pytest

from services.nlp_model import NlpModel


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real NLP data/models (slow, may download)"
    )


class StubNlpModel(NlpModel):
    """Deterministic NLP backend: fixed nouns and entities, no data files."""

    model_name = "stub"

    def __init__(self, nouns: set[str] | None = None, entities: list[str] | None = None) -> None:
        self.nouns = {n.lower() for n in (nouns or set())}
        self._entities = list(entities or [])
        self.pos_calls = 0

    def load(self) -> None:
        pass

    def pos_tag(self, tokens: list[str]) -> list[tuple[str, str]]:
        self.ensure_loaded()
        self.pos_calls += 1
        return [(t, "NN" if t.lower() in self.nouns else "VB") for t in tokens]

    def entities(self, text: str, tagged: list[tuple[str, str]]) -> list[str]:
        return list(self._entities)


@pytest.fixture
def stub_nlp():
    return StubNlpModel


SAMPLE_JD = """Senior Backend Engineer

Responsibilities:
Design distributed systems and mentor engineers.

Requirements:
5+ years experience with Kafka and Python.
Strong written communication.

Nice to have:
Terraform, Kubernetes.
"""


@pytest.fixture
def sample_jd() -> str:
    return SAMPLE_JD
