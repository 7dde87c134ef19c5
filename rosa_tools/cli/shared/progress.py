"""
Progress reporting for the remote lookups made by rosa-tools commands.

Progress goes to stderr so that table output on stdout can be piped.
"""

import sys
import time
from typing import List, Optional
from contextlib import contextmanager


class ProgressIndicator:
    """One-line progress for a sequence of OCM or AWS calls."""

    def __init__(self, message: str, enabled: bool = True, stream=None):
        """
        Initialize progress indicator.

        Args:
            message: Message to display during progress
            enabled: Whether to show progress (disabled in quiet and machine-readable modes)
            stream: Where to write (stderr by default)
        """
        self.message = message
        self.enabled = enabled
        self.stream = stream or sys.stderr
        self.steps: List[str] = []
        self.start_time: Optional[float] = None

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def start(self) -> None:
        self.start_time = time.time()
        if self.enabled:
            self._write(f"{self.message}... ")

    def step(self, detail: str) -> None:
        """Record the next remote call of the operation."""
        self.steps.append(detail)
        if self.enabled:
            self._write(f"\r{self.message} ({detail})... ")

    def finish(self, success: bool = True) -> None:
        if not self.enabled:
            return

        elapsed = time.time() - self.start_time if self.start_time else 0.0
        outcome = "✓ Done" if success else "✗ Failed"
        calls = f", {len(self.steps) + 1} calls" if self.steps else ""
        self._write(f"\r{self.message}... {outcome} ({elapsed:.1f}s{calls})\n")


@contextmanager
def progress(message: str, enabled: bool = True):
    """
    Context manager reporting progress while remote calls run.

    Yields:
        ProgressIndicator instance
    """
    indicator = ProgressIndicator(message, enabled)
    indicator.start()

    try:
        yield indicator
    except Exception:
        indicator.finish(success=False)
        raise
    indicator.finish(success=True)
