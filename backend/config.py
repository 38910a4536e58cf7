import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Request limits
    max_text_length: int = 50000  # max chars for a resume or JD body
    rate_limit: str = "30/minute"

    # NLP backend settings
    nltk_auto_download: bool = False  # fetch missing NLTK data packages on load
    ner_model: str = ""  # HF token-classification model id; "" = NLTK ne_chunk

    # Severity bucketing: bounded JD sections instead of "heading to end of text"
    segment_jd_sections: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
