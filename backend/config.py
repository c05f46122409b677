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
    max_upload_size_mb: int = 10
    max_resume_chars: int = 50000
    min_job_description_chars: int = 50
    max_job_description_chars: int = 10000

    # Image resumes go through Tesseract
    ocr_enabled: bool = True
    ocr_language: str = "eng"

    # slowapi limit strings, per client address
    rate_limit_enabled: bool = True
    upload_rate_limit: str = "10/minute"
    analysis_rate_limit: str = "30/minute"

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
