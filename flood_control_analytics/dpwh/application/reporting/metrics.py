"""Shared numeric/formatting utilities for console reports."""

from __future__ import annotations


def fmt_amount(value: float | None) -> str:
    if value is None:
        return "0.00"
    return f"{value:.2f}"


def fmt_days(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}"


def fmt_pct(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}%"


def fmt_elapsed(seconds: float) -> str:
    return f"{seconds:.3f}s"


def truncate(text: str, width: int) -> str:
    """Cut text longer than width to width-2 characters plus '..'."""
    if len(text) <= width:
        return text
    return f"{text[: width - 2]}.."
