"""
Configuration Models

Pydantic models for discovery engine configuration validation.
"""

import json
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationInfo, field_validator

DEFAULT_PARAMS_PATH = Path("config/discovery_params.json")
PARAMS_PATH_ENV_VAR = "DISCOVERY_PARAMS_PATH"


class RelevanceWeights(BaseModel):
    """Weights for field-weighted text relevance scoring."""

    name_match: int = Field(default=100, ge=0)
    title_match: int = Field(default=80, ge=0)
    term_occurrence: int = Field(default=10, ge=0)
    specialty_match: int = Field(default=30, ge=0)
    expertise_match: int = Field(default=25, ge=0)
    featured_boost: int = Field(default=20, ge=0)


class PopularityWeights(BaseModel):
    """Weights and windows for popularity scoring."""

    bounded_recent_weight: float = Field(default=2.0, gt=0)
    all_time_recent_weight: float = Field(default=1.0, gt=0)
    total_weight: float = Field(default=0.5, ge=0)
    week_days: int = Field(default=7, gt=0)
    month_days: int = Field(default=30, gt=0)

    @field_validator("month_days")
    @classmethod
    def validate_window_ordering(cls, v: int, info: ValidationInfo) -> int:
        """Validate that the month window is not shorter than the week window."""
        week = info.data.get("week_days", 7)
        if v < week:
            raise ValueError(
                f"month_days ({v}) must be greater than or equal to week_days ({week})"
            )
        return v


class SuggestionWeights(BaseModel):
    """Bonuses for personalized suggestion scoring."""

    featured_boost: int = Field(default=50, ge=0)
    category_match: int = Field(default=30, ge=0)
    experience_proximity_max: int = Field(default=20, ge=0)
    recency_boost: int = Field(default=15, ge=0)
    recency_days: int = Field(default=30, gt=0)


class ResultDefaults(BaseModel):
    """Default result sizes when the caller gives no limit."""

    suggestion_limit: int = Field(default=6, gt=0, le=100)
    popular_limit: int = Field(default=10, gt=0, le=100)
    top_categories: int = Field(default=5, gt=0, le=50)


class DiscoveryParams(BaseModel):
    """Discovery engine parameters."""

    relevance: RelevanceWeights = Field(default_factory=RelevanceWeights)
    popularity: PopularityWeights = Field(default_factory=PopularityWeights)
    suggestions: SuggestionWeights = Field(default_factory=SuggestionWeights)
    result_defaults: ResultDefaults = Field(default_factory=ResultDefaults)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "DiscoveryParams":
        """Load discovery parameters from config file.

        The path is resolved from the argument, then the
        DISCOVERY_PARAMS_PATH environment variable (``.env`` is honoured),
        then config/discovery_params.json.

        Args:
            config_path: Path to discovery_params.json

        Returns:
            DiscoveryParams: Validated configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config validation fails
        """
        if config_path is None:
            load_dotenv()
            config_path = Path(os.getenv(PARAMS_PATH_ENV_VAR, str(DEFAULT_PARAMS_PATH)))
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}. "
                f"Copy {config_path.stem}.example.json to {config_path.name}"
            )

        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)

        return cls(**config_data)
