"""Settings model for lang-audit.

Values come from (lowest to highest priority) field defaults, a config file
passed to ``load_config``, ``LANG_AUDIT_*`` environment variables and
explicit overrides such as CLI flags.
"""

import os
import re
from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USAGE_PATTERN = r"__\('([^']+)'\)"

# Framework bundles that ship with every Laravel/Jetstream install
DEFAULT_EXCLUDED_GROUPS = ["auth", "pagination", "passwords", "validation"]

OutputFormat = Literal["text", "plain", "json"]


def _default_workers() -> int:
    return os.cpu_count() or 1


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LANG_AUDIT_",
        extra="forbid",
        validate_default=True,
    )

    # Paths
    base_path: Path = Field(default_factory=Path.cwd, description="Project root")
    lang_path: Path = Field(default=Path("lang"), description="Locale resources, relative to base_path")
    scan_paths: List[Path] = Field(
        default_factory=lambda: [Path("app"), Path("resources/views")],
        description="Directories scanned for translation calls",
    )

    # Locales
    default_locale: str = "en"
    baseline_locale: str = "en"
    excluded_groups: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_GROUPS))

    # Extraction
    usage_patterns: List[str] = Field(default_factory=lambda: [DEFAULT_USAGE_PATTERN])

    # Execution
    max_workers: int = Field(default_factory=_default_workers)
    output_format: OutputFormat = "text"
    debug: bool = False

    @field_validator("usage_patterns")
    @classmethod
    def _check_patterns(cls, patterns: List[str]) -> List[str]:
        if not patterns:
            raise ValueError("at least one usage pattern is required")
        for pattern in patterns:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern {pattern!r}: {e}") from e
            if compiled.groups != 1:
                raise ValueError(
                    f"pattern {pattern!r} must have exactly one capture group, has {compiled.groups}"
                )
        return patterns

    @field_validator("max_workers")
    @classmethod
    def _check_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_workers must be at least 1")
        return value

    @field_validator("default_locale", "baseline_locale")
    @classmethod
    def _check_locale(cls, value: str) -> str:
        value = value.strip()
        if value in ("", ".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"invalid locale name {value!r}")
        return value

    @property
    def lang_dir(self) -> Path:
        """Absolute directory holding locale folders and JSON catalogs."""
        return self.base_path / self.lang_path

    @property
    def scan_dirs(self) -> List[Path]:
        """Absolute roots for the usage scan."""
        return [self.base_path / p for p in self.scan_paths]

    def compiled_patterns(self) -> List["re.Pattern[str]"]:
        return [re.compile(p) for p in self.usage_patterns]
