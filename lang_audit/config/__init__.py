"""Configuration for lang-audit."""

from .loader import load_config
from .settings import DEFAULT_EXCLUDED_GROUPS, DEFAULT_USAGE_PATTERN, Settings

__all__ = ["Settings", "load_config", "DEFAULT_EXCLUDED_GROUPS", "DEFAULT_USAGE_PATTERN"]
