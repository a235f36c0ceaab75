"""Configuration management module."""

from .settings import AnalysisConfig, AppConfig

__all__ = ["AppConfig", "AnalysisConfig"]
