"""Timestamp helpers for log and output directory names."""

from datetime import datetime


def now() -> str:
    """Second-resolution timestamp for directory names (e.g., 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
