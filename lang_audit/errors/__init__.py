"""
Error handling for lang-audit.

- Structured error hierarchy with exit codes
- CLI boundary decorator that turns known errors into exit statuses
"""

from .exceptions import (
    LangAuditError,
    PermanentError,
    ConfigurationError,
    LocaleNotFoundError,
    GroupFileNotFoundError,
    LangFolderNotFoundError,
    ResourceParseError,
)

from .decorators import handle_errors

__all__ = [
    # Exceptions
    "LangAuditError",
    "PermanentError",
    "ConfigurationError",
    "LocaleNotFoundError",
    "GroupFileNotFoundError",
    "LangFolderNotFoundError",
    "ResourceParseError",

    # Decorators
    "handle_errors",
]
