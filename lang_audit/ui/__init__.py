"""Terminal output helpers."""

from .progress import Console, ProgressIndicator

__all__ = ["Console", "ProgressIndicator"]
