"""
Configuration for Mau Mau.

Values are read from (in order of precedence):
1. Environment variables
2. .env file (if exists)
3. Default values

Usage:
    from maumau.config import config
    settings = config.game_settings()
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from maumau.engine.game_state import DEFAULT_STARTING_SCORE, GameSettings
from maumau.orchestration.game_runner import DEFAULT_MAX_ROUNDS, DEFAULT_MAX_TURNS

load_dotenv()


def get_env(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key, "").lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off"):
        return False
    return default


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable."""
    try:
        return int(os.environ.get(key, str(default)))
    except ValueError:
        return default


@dataclass
class Config:
    """Application configuration."""

    # Rule defaults
    STARTING_SCORE: int = DEFAULT_STARTING_SCORE
    WILDCARDS: bool = False
    BLUFFING: bool = False
    LAST_CARD_RULE: bool = True
    AUTO_LAST_CARD: bool = True

    # Runner limits
    MAX_TURNS: int = DEFAULT_MAX_TURNS  # per round
    MAX_ROUNDS: int = DEFAULT_MAX_ROUNDS  # per match

    LOG_LEVEL: str = "WARNING"

    # LLM providers
    LLM_PROVIDER: str = "openrouter"
    LLM_MODEL: str = "openai/gpt-4o-mini"
    LLM_TIMEOUT: int = 30  # seconds

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls(
            STARTING_SCORE=get_env_int("MAUMAU_STARTING_SCORE", DEFAULT_STARTING_SCORE),
            WILDCARDS=get_env_bool("MAUMAU_WILDCARDS", False),
            BLUFFING=get_env_bool("MAUMAU_BLUFFING", False),
            LAST_CARD_RULE=get_env_bool("MAUMAU_LAST_CARD_RULE", True),
            AUTO_LAST_CARD=get_env_bool("MAUMAU_AUTO_LAST_CARD", True),
            MAX_TURNS=get_env_int("MAUMAU_MAX_TURNS", DEFAULT_MAX_TURNS),
            MAX_ROUNDS=get_env_int("MAUMAU_MAX_ROUNDS", DEFAULT_MAX_ROUNDS),
            LOG_LEVEL=get_env("MAUMAU_LOG_LEVEL", "WARNING").upper(),
            LLM_PROVIDER=get_env("MAUMAU_LLM_PROVIDER", "openrouter"),
            LLM_MODEL=get_env("MAUMAU_LLM_MODEL", "openai/gpt-4o-mini"),
            LLM_TIMEOUT=get_env_int("MAUMAU_LLM_TIMEOUT", 30),
        )

    def game_settings(self) -> GameSettings:
        return GameSettings(
            starting_score=self.STARTING_SCORE,
            include_wildcards=self.WILDCARDS,
            enable_bluffing=self.BLUFFING,
            enable_last_card_rule=self.LAST_CARD_RULE,
            auto_declare_last_card=self.AUTO_LAST_CARD,
        )


config = Config.from_env()
