"""
Engine Settings

Loads process-level settings from environment variables and provides defaults.
Supports loading from a .env file using python-dotenv. Only the engine
factory (RecommendationEngine.from_settings) reads these; core components
receive an explicit RankingConfig.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_ROOT_ENV = Path(__file__).resolve().parent.parent / ".env"
if _ROOT_ENV.exists():
    load_dotenv(_ROOT_ENV)


@dataclass
class EngineSettings:
    """Engine process settings."""

    # JSON file with tunable weights (see config.json); None = built-in defaults
    ranking_config_path: Optional[Path] = None
    log_level: str = "INFO"
    # Limit used when rank() is called without one
    default_limit: int = 20

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Load settings from environment variables."""
        base_dir = Path(__file__).resolve().parent.parent
        raw_path = os.getenv("RANKING_CONFIG_PATH", "").strip()
        config_path = None
        if raw_path:
            p = Path(raw_path)
            config_path = p if p.is_absolute() else (base_dir / p).resolve()
        return cls(
            ranking_config_path=config_path,
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            default_limit=int(os.getenv("DEFAULT_LIMIT", "20")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the settings.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if self.ranking_config_path is not None and not self.ranking_config_path.is_file():
            errors.append(f"Ranking config not found: {self.ranking_config_path}")
        if self.default_limit < 0:
            errors.append(f"DEFAULT_LIMIT must be >= 0, got {self.default_limit}")
        return len(errors) == 0, errors


# Cached settings instance
_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Get the cached settings instance."""
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_env()
    return _settings


def reload_settings() -> EngineSettings:
    """Reload settings from environment."""
    global _settings
    _settings = None
    return get_settings()
