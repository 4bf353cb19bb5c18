"""Formatting of elapsed and remaining durations."""

from __future__ import annotations

from datetime import timedelta

_SECONDS_PER_DAY = 86_400


def _components(duration: timedelta) -> tuple[int, int, int, int]:
    """Split a duration into whole hours, minutes, seconds and tenths."""
    if duration < timedelta(0):
        raise ValueError("duration must not be negative")
    total_secs = duration.days * _SECONDS_PER_DAY + duration.seconds
    hours, rest = divmod(total_secs, 3600)
    minutes, secs = divmod(rest, 60)
    tenths = duration.microseconds // 100_000
    return hours, minutes, secs, tenths


def format_duration(duration: timedelta) -> str:
    """Format as ``HH:MM:SS.d``; hours are always shown."""
    hours, minutes, secs, tenths = _components(duration)
    return f"{hours:02}:{minutes:02}:{secs:02}.{tenths}"


def format_duration_parts(duration: timedelta) -> tuple[str, str, str]:
    """Split into ``("HH:MM:", "SS", ".d")`` for styled display."""
    hours, minutes, secs, tenths = _components(duration)
    return f"{hours:02}:{minutes:02}:", f"{secs:02}", f".{tenths}"


def format_duration_hms(duration: timedelta) -> str:
    """Format as ``HH:MM:SS`` without the fractional part."""
    hours, minutes, secs, _ = _components(duration)
    return f"{hours:02}:{minutes:02}:{secs:02}"