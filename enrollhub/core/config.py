import logging
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning(f"[config] {name}={raw!r} is not a valid number, using {default}")
        return default


def _env_log_level(default: str) -> str:
    raw = os.getenv("LOG_LEVEL")
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"[config] LOG_LEVEL={raw!r} is not a logging level, using {default}")
        return default
    return level


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./enrollhub.db"
    whatsapp_api_endpoint: Optional[str] = None
    whatsapp_api_key: Optional[str] = None
    whatsapp_country_code: str = "252"
    whatsapp_timeout: float = 30.0
    groups_cache_seconds: int = 60
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"])
    log_level: str = "INFO"

    @property
    def groups_base_url(self) -> Optional[str]:
        """Provider base URL, i.e. the groups endpoint without its trailing /groups."""
        if not self.whatsapp_api_endpoint:
            return None
        return re.sub(r"/groups/?$", "", self.whatsapp_api_endpoint.strip())


def load_settings() -> Settings:
    defaults = Settings()
    cors = os.getenv("CORS_ORIGINS")
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults.database_url),
        whatsapp_api_endpoint=os.getenv("WHATSAPP_API_ENDPOINT") or None,
        whatsapp_api_key=os.getenv("WHATSAPP_API_KEY") or None,
        whatsapp_country_code=os.getenv("WHATSAPP_COUNTRY_CODE", defaults.whatsapp_country_code),
        whatsapp_timeout=_env_number("WHATSAPP_TIMEOUT", float, defaults.whatsapp_timeout),
        groups_cache_seconds=_env_number("GROUPS_CACHE_SECONDS", int, defaults.groups_cache_seconds),
        admin_username=os.getenv("ADMIN_USERNAME") or None,
        admin_password=os.getenv("ADMIN_PASSWORD") or None,
        cors_origins=_split_origins(cors) if cors else defaults.cors_origins,
        log_level=_env_log_level(defaults.log_level),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
