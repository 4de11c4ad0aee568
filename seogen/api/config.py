"""Process configuration.

Values are read once from the environment (and an optional project-root
``.env`` file) and exposed as module constants.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

_project_root = Path(__file__).resolve().parents[2]
load_dotenv(_project_root / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# AI gateway
AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
AI_GATEWAY_API_KEY = os.getenv("AI_GATEWAY_API_KEY") or os.getenv("LOVABLE_API_KEY")
AI_GATEWAY_TIMEOUT = float(os.getenv("AI_GATEWAY_TIMEOUT", "120"))
DEFAULT_AI_MODEL = os.getenv("DEFAULT_AI_MODEL", "gemini-flash")

# Retry policy
LLM_MAX_ATTEMPTS = int(os.getenv("LLM_MAX_ATTEMPTS", "3"))
LLM_BACKOFF_BASE = float(os.getenv("LLM_BACKOFF_BASE", "2.0"))
LLM_BACKOFF_MULTIPLIER = float(os.getenv("LLM_BACKOFF_MULTIPLIER", "2.0"))

# Briefing storage (S3 compatible)
STORAGE_ENDPOINT = os.getenv("STORAGE_ENDPOINT", "localhost:9000")
STORAGE_ACCESS_KEY = os.getenv("STORAGE_ACCESS_KEY", "minioadmin")
STORAGE_SECRET_KEY = os.getenv("STORAGE_SECRET_KEY", "minioadmin")
STORAGE_SECURE = _env_bool("STORAGE_SECURE", False)
BRIEFING_BUCKET = os.getenv("BRIEFING_BUCKET", "briefings")

# Auth
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "dev-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")
ENVIRONMENT = os.getenv("ENVIRONMENT", "production")
SKIP_AUTH = ENVIRONMENT == "development"

# HTTP surface
# Comma-separated allowed origins; "*" allows any origin
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
] or ["*"]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

SERVICE_NAME = "generate-seo-content"
SERVICE_VERSION = "0.1.0"
