"""Runtime configuration, read from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Self

from src.core.shared_types import Difficulty

DEFAULT_DATABASE_URL = "sqlite:///chess.db"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    default_difficulty: Difficulty = Difficulty.MEDIUM
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build settings from CHESS_* environment variables. Missing variables keep the defaults."""
        env = os.environ if environ is None else environ

        difficulty_name = env.get("CHESS_DEFAULT_DIFFICULTY", Difficulty.MEDIUM.value)
        if difficulty_name.lower() not in Difficulty._value2member_map_:
            raise ValueError(
                f"Unknown difficulty {difficulty_name!r}. Pick one of {', '.join(d.value for d in Difficulty)}"
            )

        log_level = env.get("CHESS_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unknown log level {log_level!r}")

        return cls(
            database_url=env.get("CHESS_DATABASE_URL", DEFAULT_DATABASE_URL),
            default_difficulty=Difficulty(difficulty_name.lower()),
            log_level=log_level,
            sql_echo=env.get("CHESS_SQL_ECHO", "").lower() in TRUTHY,
        )


def configure_logging(settings: Settings) -> None:
    """Called once by the host application. Library modules only create loggers."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
