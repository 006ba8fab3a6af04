"""
Configuration package for pagerender

Provides application settings via environment variables and YAML files
using pydantic-settings.
"""

from .settings import (
    AppSettings,
    ConfigError,
    StyleSpec,
    StyleSettings,
    IndentSettings,
    OutputSettings,
)

__all__ = [
    "AppSettings",
    "ConfigError",
    "StyleSpec",
    "StyleSettings",
    "IndentSettings",
    "OutputSettings",
]
