"""
Console output and progress bars for the CLI.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO


class ProgressIndicator:
    """Single-line progress bar redrawn in place."""

    def __init__(self, stream: TextIO, width: int = 28):
        self.stream = stream
        self.width = width
        self.is_running = False
        self.current_step = 0
        self.total_steps = 0

    def start(self, total_steps: int) -> None:
        self.total_steps = total_steps
        self.current_step = 0
        self.is_running = True
        self._draw()

    def update(self, step: int) -> None:
        if not self.is_running:
            return
        self.current_step = step
        self._draw()

    def complete(self) -> None:
        if not self.is_running:
            return
        self.is_running = False
        self.current_step = self.total_steps
        self._draw()
        self.stream.write("\n")
        self.stream.flush()

    def _draw(self) -> None:
        if self.total_steps > 0:
            ratio = self.current_step / self.total_steps
        else:
            ratio = 1.0
        filled = int(ratio * self.width)
        bar = "▓" * filled + "░" * (self.width - filled)
        self.stream.write(f"\r {self.current_step}/{self.total_steps} [{bar}] {int(ratio * 100):3d}%")
        self.stream.flush()


class Console:
    """Human-readable progress for text mode; silent otherwise."""

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True):
        self.stream = stream or sys.stdout
        self.enabled = enabled
        self._progress: Optional[ProgressIndicator] = None

    def info(self, message: str = "") -> None:
        if self.enabled:
            print(message, file=self.stream)

    def warn(self, message: str) -> None:
        if self.enabled:
            print(f"! {message}", file=self.stream)

    def new_line(self, count: int = 1) -> None:
        if self.enabled:
            self.stream.write("\n" * count)

    def scan_progress(self, root: Path, done: int, total: int) -> None:
        """Progress callback for ``UsageExtractor.scan_directory``."""
        if not self.enabled:
            return
        if done == 0:
            self._progress = ProgressIndicator(self.stream)
            self._progress.start(total)
            if total == 0:
                self._progress.complete()
            return
        if self._progress is None:
            return
        self._progress.update(done)
        if done >= total:
            self._progress.complete()
