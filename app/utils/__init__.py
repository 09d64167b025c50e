"""Utility helpers for reusable functionality."""

from .datetime import (
    current_year_in_app_timezone,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
)

__all__ = [
    "current_year_in_app_timezone",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
]
