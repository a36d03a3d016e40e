import logging
import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    gemini_api_key: str
    gemini_model: str = DEFAULT_GEMINI_MODEL
    cors_origins: tuple[str, ...] = ("*",)


def load_settings() -> Settings:
    """
    Reads the service configuration from the environment.
    Identity provider and language model credentials are mandatory: the process exits without them.
    """
    supabase_url = os.getenv("SUPABASE_URL")
    supabase_anon_key = os.getenv("SUPABASE_ANON_KEY")
    gemini_api_key = os.getenv("GEMINI_API_KEY")

    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", supabase_url),
            ("SUPABASE_ANON_KEY", supabase_anon_key),
            ("GEMINI_API_KEY", gemini_api_key),
        )
        if not value
    ]
    if missing:
        logger.critical(f"❌ CRITICAL ERROR: missing environment variables: {', '.join(missing)}")
        sys.exit(1)

    origins = os.getenv("CORS_ORIGINS") or "*"

    return Settings(
        supabase_url=supabase_url.rstrip("/"),
        supabase_anon_key=supabase_anon_key,
        gemini_api_key=gemini_api_key,
        gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
