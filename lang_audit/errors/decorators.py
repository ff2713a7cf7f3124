"""
Error handling decorators for lang-audit.

Applied at the CLI boundary so command functions can raise freely and the
process still exits with a clean message and the right status.
"""

import functools
import sys
from typing import Callable, Optional

import structlog

from .exceptions import LangAuditError

logger = structlog.get_logger(__name__)


def handle_errors(operation_name: Optional[str] = None, log_errors: bool = True):
    """
    Turn ``LangAuditError`` into an exit code.

    Args:
        operation_name: Name for operation identification in logs
        log_errors: Whether to log handled errors

    The wrapped function must return an ``int`` exit code. Known errors are
    logged, their message is written to stderr and their ``exit_code`` is
    returned. Anything else is logged with a traceback and re-raised.
    """
    def decorator(func: Callable[..., int]) -> Callable[..., int]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> int:
            op_name = operation_name or f"{func.__module__}.{func.__name__}"
            try:
                return func(*args, **kwargs)

            except LangAuditError as e:
                if log_errors:
                    logger.error(
                        "Operation failed",
                        operation=op_name,
                        **e.to_dict(),
                    )
                print(e.user_message, file=sys.stderr)
                return e.exit_code

            except Exception as e:
                logger.exception("Unhandled error in operation", operation=op_name, error=str(e))
                raise

        return wrapper

    return decorator
