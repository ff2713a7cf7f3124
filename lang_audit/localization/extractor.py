"""
Find translation keys referenced in source and template files.

Only literal keys are visible: ``__('messages.welcome')`` is found, while
``__($key)`` or ``__("messages.{$name}")`` are not. Keys built at runtime
therefore show up as unused and cannot be reported as missing.
"""

import os
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Set, Union

import structlog

from ..config import DEFAULT_USAGE_PATTERN

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[Path, int, int], None]


class UsageExtractor:
    """Scans files for translation calls and collects their literal keys."""

    def __init__(
        self,
        patterns: Optional[Sequence[Union[str, "re.Pattern[str]"]]] = None,
        max_workers: int = 1,
    ):
        """Initialize the extractor.

        Args:
            patterns: Regexes with one capture group holding the key;
                defaults to the single-quoted ``__('...')`` call
            max_workers: Bound of the per-file scan pool
        """
        self.patterns: List["re.Pattern[str]"] = [
            re.compile(p) if isinstance(p, str) else p
            for p in (patterns or [DEFAULT_USAGE_PATTERN])
        ]
        self.max_workers = max(1, max_workers)

    def extract_from_text(self, text: str) -> Set[str]:
        """Keys referenced in one chunk of text, captured verbatim."""
        keys: Set[str] = set()
        for pattern in self.patterns:
            keys.update(pattern.findall(text))
        return keys

    def scan_file(self, path: Path) -> Set[str]:
        """Keys referenced in one file; unreadable files yield nothing."""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            logger.warning("Cannot read file", file=str(path), error=str(e))
            return set()
        return self.extract_from_text(text)

    @staticmethod
    def iter_files(root: Path) -> Iterator[Path]:
        """Every regular file below ``root``, in a stable order."""
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if path.is_file():
                    yield path

    def scan_directory(self, root: Path, progress: Optional[ProgressCallback] = None) -> Set[str]:
        """Keys referenced anywhere below ``root``."""
        if not root.is_dir():
            logger.warning("Scan directory not found", directory=str(root))
            return set()

        files = list(self.iter_files(root))
        total = len(files)
        found: Set[str] = set()
        if progress:
            progress(root, 0, total)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for done, keys in enumerate(executor.map(self.scan_file, files), start=1):
                found |= keys
                if progress:
                    progress(root, done, total)

        logger.info("Scanned directory", directory=str(root), files=total, keys=len(found))
        return found

    def scan_paths(self, roots: Iterable[Path], progress: Optional[ProgressCallback] = None) -> Set[str]:
        """Merged, de-duplicated keys across all ``roots``."""
        referenced: Set[str] = set()
        for root in roots:
            referenced |= self.scan_directory(Path(root), progress)
        return referenced
