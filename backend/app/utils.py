"""Utility functions for the application."""
import time
from typing import Optional


def current_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def make_stored_file_name(original_name: str, now_ms: Optional[int] = None) -> str:
    """Build the on-disk name for an upload: `<millis>-<original name>`.

    Two uploads of the same name within one millisecond collide.
    """
    if now_ms is None:
        now_ms = current_millis()
    return f"{now_ms}-{original_name}"
