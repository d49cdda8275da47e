"""Configuration helpers for pipeline runs."""

from .settings import (
    DEFAULT_CATALOG_URL,
    DEFAULT_EXCLUDED_POSITIONS,
    MATCHER_NAMES,
    SLEEPER_API_BASE,
    PipelineSettings,
    normalize_positions,
)

__all__ = [
    "DEFAULT_CATALOG_URL",
    "DEFAULT_EXCLUDED_POSITIONS",
    "MATCHER_NAMES",
    "SLEEPER_API_BASE",
    "PipelineSettings",
    "normalize_positions",
]
