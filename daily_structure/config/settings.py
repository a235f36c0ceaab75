"""
Configuration settings using Pydantic v2.

Supports loading from YAML files and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

ENV_PREFIX = "DAILY_STRUCTURE_"


class AnalysisConfig(BaseModel):
    """Analysis parameters configuration."""

    swing_lookback: int = Field(
        default=1, description="Swing detection lookback (bars before/after)", ge=1, le=20
    )
    price_tolerance_pct: float = Field(
        default=0.001,
        description="Price tolerance percentage for double tops/bottoms",
        ge=0.0,
        le=0.1,
    )
    neutral_band_pct: float = Field(
        default=0.1,
        description="Half-width of the neutral band around EQ, as a fraction of session range",
        ge=0.0,
        le=0.5,
    )
    into_eq_threshold: float = Field(
        default=0.5,
        description="Retracement fraction toward EQ that marks an into-EQ bias",
        ge=0.0,
        le=1.0,
    )
    recent_bars: int = Field(
        default=3, description="Trailing bars used for structure state", ge=1, le=50
    )

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }


class AppConfig(BaseModel):
    """Application-wide configuration."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)

    # Path settings
    data_dir: str = Field(default="data", description="Bar data directory")
    log_dir: str = Field(default="logs", description="Log directory")

    # Logging settings
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_to_file: bool = Field(default=False, description="Enable file logging")

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }

    @classmethod
    def from_yaml(cls, path: str | Path) -> AppConfig:
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        data = cls._apply_env_overrides(data)

        return cls(**data)

    @classmethod
    def from_yaml_or_default(cls, path: str | Path | None = None) -> AppConfig:
        """
        Load configuration from YAML file or use defaults.

        Args:
            path: Optional path to YAML configuration file

        Returns:
            AppConfig instance
        """
        if path is None:
            default_paths = [
                Path("daily_structure.yaml"),
                Path("config/daily_structure.yaml"),
            ]

            for default_path in default_paths:
                if default_path.exists():
                    path = default_path
                    break

        if path and Path(path).exists():
            return cls.from_yaml(path)

        data = cls._apply_env_overrides({})
        return cls(**data)

    @classmethod
    def _apply_env_overrides(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables are prefixed with DAILY_STRUCTURE_
        Example: DAILY_STRUCTURE_ANALYSIS_SWING_LOOKBACK=3
        """
        if "analysis" not in data:
            data["analysis"] = {}

        env_mappings = {
            "ANALYSIS_SWING_LOOKBACK": ("analysis", "swing_lookback", int),
            "ANALYSIS_PRICE_TOLERANCE_PCT": ("analysis", "price_tolerance_pct", float),
            "ANALYSIS_NEUTRAL_BAND_PCT": ("analysis", "neutral_band_pct", float),
            "ANALYSIS_INTO_EQ_THRESHOLD": ("analysis", "into_eq_threshold", float),
            "ANALYSIS_RECENT_BARS": ("analysis", "recent_bars", int),
            "LOG_LEVEL": ("log_level", None, str),
            "LOG_TO_FILE": (
                "log_to_file",
                None,
                lambda x: x.lower() in ("true", "1", "yes"),
            ),
        }

        for suffix, mapping in env_mappings.items():
            env_value = os.getenv(ENV_PREFIX + suffix)
            if env_value is None:
                continue
            if mapping[1] is not None:
                section, key, converter = mapping
                data[section][key] = converter(env_value)
            else:
                key, _, converter = mapping
                data[key] = converter(env_value)

        return data

    def to_yaml(self, path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path where to save the configuration
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)
