"""Environment-driven settings for the ATS service."""

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration read from the environment.

    Attributes:
        supabase_url: URL of the Supabase project backing the store.
        supabase_key: Service key for the Supabase project.
        cors_origins: Origins allowed to call the API from a browser.
        log_level: Root log level name (e.g., "INFO", "DEBUG").
        log_dir: Directory for the error log file.
    """
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"
    log_dir: str = "logs"


def _split_origins(raw: Optional[str]) -> Optional[List[str]]:
    if not raw:
        return None
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Build the settings object once per process.

    Returns:
        Settings populated from environment variables (and .env if present).
    """
    values = {
        "supabase_url": os.environ.get("SUPABASE_URL"),
        "supabase_key": os.environ.get("SUPABASE_KEY"),
        "log_level": os.environ.get("ATS_LOG_LEVEL", "INFO").upper(),
        "log_dir": os.environ.get("ATS_LOG_DIR", "logs"),
    }
    origins = _split_origins(os.environ.get("ATS_CORS_ORIGINS"))
    if origins:
        values["cors_origins"] = origins

    return Settings(**values)
