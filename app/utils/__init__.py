"""Utility helpers for reusable functionality."""

from .datetime import (
    attach_timezone,
    ensure_naive_datetime,
    now_in_timezone,
    now_naive,
    resolve_timezone,
)

__all__ = [
    "attach_timezone",
    "ensure_naive_datetime",
    "now_in_timezone",
    "now_naive",
    "resolve_timezone",
]
