"""
Runtime configuration.

Every setting can be overridden with an OTHELLO_* environment variable. Read once per process via get_settings().
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from src.core.shared_types import Difficulty

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = field(
        default_factory=lambda: os.environ.get(
            "OTHELLO_DATABASE_URL", "sqlite:///othello.db"
        )
    )
    sql_echo: bool = field(
        default_factory=lambda: os.environ.get("OTHELLO_SQL_ECHO", "").lower()
        in _TRUTHY
    )
    default_difficulty: Difficulty = field(
        default_factory=lambda: Difficulty(
            os.environ.get("OTHELLO_DEFAULT_DIFFICULTY", Difficulty.EASY.value).lower()
        )
    )
    # seconds. 0 (or negative) means: no limit, search always runs to full depth
    search_time_limit: float = field(
        default_factory=lambda: float(
            os.environ.get("OTHELLO_SEARCH_TIME_LIMIT", "10.0")
        )
    )
    ai_workers: int = field(
        default_factory=lambda: int(os.environ.get("OTHELLO_AI_WORKERS", "2"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("OTHELLO_LOG_LEVEL", "INFO").upper()
    )

    @property
    def time_limit(self) -> Optional[float]:
        """Search time limit as consumed by AlphaBetaSearch (None = unlimited)."""
        return self.search_time_limit if self.search_time_limit > 0 else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Set up root logging for a process embedding the engine (library code itself only creates loggers)."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug(f"Logging configured at level {settings.log_level}")
