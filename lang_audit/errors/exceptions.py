"""
Error hierarchy for lang-audit.

Every failure the tool knows about is a ``LangAuditError``. Each error carries
a machine-friendly ``error_code``, a context dict for structured logging and
the process exit status the CLI should return when it escapes a command.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pathlib import Path


class LangAuditError(Exception):
    """
    Base exception for all lang-audit errors.

    Provides error context and categorization for logging and for mapping
    errors onto process exit codes.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        previous_error: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.user_message = user_message or message
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "user_message": self.user_message,
            "exit_code": self.exit_code,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }


class PermanentError(LangAuditError):
    """Base class for errors that abort the whole run."""
    pass


class ConfigurationError(PermanentError):
    """Invalid settings, config file or extraction pattern."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            context={"config_key": config_key},
            **kwargs
        )


class LocaleNotFoundError(PermanentError):
    """Neither ``lang/{locale}/`` nor ``lang/{locale}.json`` exists."""

    def __init__(self, locale: str, lang_path: Optional[Path] = None, **kwargs):
        super().__init__(
            f'No translations found for lang "{locale}".',
            context={"locale": locale, "lang_path": str(lang_path) if lang_path else None},
            **kwargs
        )
        self.locale = locale


class GroupFileNotFoundError(PermanentError):
    """An explicitly requested resource group has no file for the locale."""

    def __init__(self, group: str, locale: str, directory: Optional[Path] = None, **kwargs):
        super().__init__(
            f"File {group}.php not found.",
            context={
                "group": group,
                "locale": locale,
                "directory": str(directory) if directory else None,
            },
            **kwargs
        )
        self.group = group
        self.locale = locale


class LangFolderNotFoundError(LangAuditError):
    """
    The locale has no resource directory to auto-discover groups from.

    Not fatal: a locale backed only by its JSON catalog is valid, so the
    loader downgrades this to a warning and continues with no groups.
    """

    def __init__(self, locale: str, directory: Optional[Path] = None, **kwargs):
        super().__init__(
            "Lang folder not found.",
            context={"locale": locale, "directory": str(directory) if directory else None},
            **kwargs
        )
        self.locale = locale


class ResourceParseError(PermanentError):
    """A group file or JSON catalog could not be read into a mapping."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        line: Optional[int] = None,
        **kwargs
    ):
        location = str(path) if path else "<string>"
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(
            f"{location}: {message}",
            context={"path": str(path) if path else None, "line": line},
            **kwargs
        )
        self.path = path
        self.line = line

