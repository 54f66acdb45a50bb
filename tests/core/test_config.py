"""Unit tests for src/core/config.py"""

from unittest.mock import patch

import pytest

from src.core.config import DEFAULT_DATABASE_URL, Settings, configure_logging
from src.core.shared_types import Difficulty


def test_defaults_without_environment() -> None:
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.default_difficulty == Difficulty.MEDIUM
    assert not settings.sql_echo


def test_read_from_environment() -> None:
    settings = Settings.from_env(
        {
            "CHESS_DATABASE_URL": "sqlite:///:memory:",
            "CHESS_DEFAULT_DIFFICULTY": "Hard",
            "CHESS_LOG_LEVEL": "debug",
            "CHESS_SQL_ECHO": "yes",
        }
    )
    assert settings.database_url == "sqlite:///:memory:"
    assert settings.default_difficulty == Difficulty.HARD
    assert settings.log_level == "DEBUG"
    assert settings.sql_echo


@pytest.mark.parametrize(
    "environ",
    [
        {"CHESS_DEFAULT_DIFFICULTY": "grandmaster"},
        {"CHESS_LOG_LEVEL": "loud"},
    ],
)
def test_invalid_values(environ: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        Settings.from_env(environ)


def test_configure_logging_uses_level() -> None:
    with patch("src.core.config.logging.basicConfig") as basic_config:
        configure_logging(Settings(log_level="DEBUG"))
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == "DEBUG"
