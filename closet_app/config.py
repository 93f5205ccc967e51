"""Configuration helpers for the Closet Stylist app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_WARDROBE_DB_PATH = "data/wardrobe.db"
MIN_SCORE_WITH_SEASON = 65
MIN_SCORE_WITHOUT_SEASON = 60
DEFAULT_MAX_SUGGESTIONS = 6
DEFAULT_ACCESSORY_SAMPLE_LIMIT = 2
DEFAULT_REASONING_LIMIT = 3
DEFAULT_RECENT_WEAR_LIMIT = 3


@dataclass(frozen=True)
class SuggestionSettings:
    """Tunable thresholds and sampling bounds for outfit suggestions."""

    min_score_with_season: int = MIN_SCORE_WITH_SEASON
    min_score_without_season: int = MIN_SCORE_WITHOUT_SEASON
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    accessory_sample_limit: int = DEFAULT_ACCESSORY_SAMPLE_LIMIT
    reasoning_limit: int = DEFAULT_REASONING_LIMIT
    recent_wear_limit: int = DEFAULT_RECENT_WEAR_LIMIT

    def min_score(self, season_preference: Optional[str]) -> int:
        return self.min_score_with_season if season_preference else self.min_score_without_season


@dataclass
class AppConfig:
    """Configuration values for the app.

    Suggestion tunables default to the values the scoring rules were
    calibrated with; override them per environment rather than in code.
    """

    wardrobe_db_path: str = DEFAULT_WARDROBE_DB_PATH
    log_level: str = "INFO"
    environment: str | None = None
    min_score_with_season: int = MIN_SCORE_WITH_SEASON
    min_score_without_season: int = MIN_SCORE_WITHOUT_SEASON
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    accessory_sample_limit: int = DEFAULT_ACCESSORY_SAMPLE_LIMIT
    reasoning_limit: int = DEFAULT_REASONING_LIMIT
    recent_wear_limit: int = DEFAULT_RECENT_WEAR_LIMIT

    def suggestion_settings(self) -> SuggestionSettings:
        return SuggestionSettings(
            min_score_with_season=self.min_score_with_season,
            min_score_without_season=self.min_score_without_season,
            max_suggestions=self.max_suggestions,
            accessory_sample_limit=self.accessory_sample_limit,
            reasoning_limit=self.reasoning_limit,
            recent_wear_limit=self.recent_wear_limit,
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take
        precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("CLOSET_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        def get_int(key: str, default: int) -> int:
            raw = get_value(key)
            if raw is None or str(raw).strip() == "":
                return default
            try:
                return int(raw)
            except ValueError as exc:
                raise ValueError(f"Configuration value '{key}' must be an integer, got {raw!r}") from exc

        return cls(
            wardrobe_db_path=str(get_value("wardrobe_db_path", DEFAULT_WARDROBE_DB_PATH)),
            log_level=str(get_value("log_level", "INFO")),
            environment=env_name,
            min_score_with_season=get_int("min_score_with_season", MIN_SCORE_WITH_SEASON),
            min_score_without_season=get_int("min_score_without_season", MIN_SCORE_WITHOUT_SEASON),
            max_suggestions=get_int("max_suggestions", DEFAULT_MAX_SUGGESTIONS),
            accessory_sample_limit=get_int("accessory_sample_limit", DEFAULT_ACCESSORY_SAMPLE_LIMIT),
            reasoning_limit=get_int("reasoning_limit", DEFAULT_REASONING_LIMIT),
            recent_wear_limit=get_int("recent_wear_limit", DEFAULT_RECENT_WEAR_LIMIT),
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
