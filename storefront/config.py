import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

_ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str] = None
    port: int = 8080
    log_level: str = "INFO"
    database_echo: bool = False

    @property
    def mode(self) -> str:
        """'connected' with a primary store, 'memory' otherwise (a supported mode)"""
        return "connected" if self.database_url else "memory"


def normalize_database_url(url: Optional[str]) -> Optional[str]:
    """Maps plain driver URLs onto their asyncio drivers; blank means no store"""
    if not url or not url.strip():
        return None
    url = url.strip()
    for prefix, async_prefix in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=normalize_database_url(os.environ.get("DATABASE_URL")),
        port=int(os.environ.get("PORT", "8080")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        database_echo=os.environ.get("DATABASE_ECHO", "false").lower() in ("1", "true", "yes"),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
