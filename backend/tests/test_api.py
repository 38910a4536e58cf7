import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_extractor
from config import settings
from main import app
from services.keyword_extractor import KeywordExtractor

BACKEND_JD = (
    "Looking for a Senior Backend Engineer with 5+ years experience "
    "in distributed systems and Kafka"
)


@pytest.fixture
def client():
    # Keep tests off the NLTK data files
    app.dependency_overrides[get_extractor] = lambda: KeywordExtractor()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "ner_backend": "none"}


def test_extract_keywords(client):
    response = client.post("/keywords/extract", json={"text": BACKEND_JD})
    assert response.status_code == 200
    data = response.json()
    assert any("5+ years" in r for r in data["requirements"])
    assert "kafka" in data["raw"]
    assert set(data) == {"skills", "knowledge", "tools", "requirements", "raw", "categories"}


def test_extract_keywords_invalid_options_fall_back(client):
    default = client.post("/keywords/extract", json={"text": BACKEND_JD}).json()
    response = client.post(
        "/keywords/extract", json={"text": BACKEND_JD, "options": {"minLength": "abc"}}
    )
    assert response.status_code == 200
    assert response.json() == default


def test_extract_keywords_rejects_oversized_text(client):
    response = client.post(
        "/keywords/extract", json={"text": "a" * (settings.max_text_length + 1)}
    )
    assert response.status_code == 422


def test_match_skills(client):
    response = client.post(
        "/skills/match",
        json={"jd_keywords": ["Python", "leadership"], "resume_keywords": ["python", "mentor"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert [m["match_type"] for m in data["matches"]] == ["exact", "synonym"]
    assert data["match_score"] == 100


def test_gap_analyze(client):
    keywords = {"skills": ["Writing"], "knowledge": ["Chemistry"], "tools": ["kafka"]}
    response = client.post(
        "/gap/analyze",
        json={"resume_keywords": keywords, "jd_keywords": keywords, "job_description": "Writing and kafka."},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["overall_match_score"] == 100
    assert data["missing_keywords"] == {"critical": [], "important": [], "nice_to_have": []}


def test_analyze_quick(client):
    response = client.post(
        "/analyze/quick",
        json={
            "resume_text": "Backend engineer. Built distributed systems with Kafka and Python.",
            "job_description": BACKEND_JD,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {
        "resume_keywords", "jd_keywords", "gap", "improvement", "summary", "required_years",
    }
    assert data["required_years"] == {"min": 5, "max": None}
    assert 0 <= data["gap"]["overall_match_score"] <= 100
    assert data["improvement"]["current_score"] == data["gap"]["overall_match_score"]
    assert data["summary"]


def test_analyze_quick_requires_both_texts(client):
    response = client.post("/analyze/quick", json={"resume_text": "Python"})
    assert response.status_code == 422
