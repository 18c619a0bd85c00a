"""Compact rendering of episode durations (``1h 2m 3s``)."""

from __future__ import annotations


class DurationParseError(ValueError):
    """A duration segment is not a non-negative integer."""


def _parse_segment(segment: str, duration: str) -> int:
    if not (segment.isascii() and segment.isdigit()):
        raise DurationParseError(f"Malformed duration {duration!r}: {segment!r} is not a non-negative integer")
    return int(segment)


def format_duration(duration: str) -> str:
    """Format ``H:M:S`` or a raw second count; blank input gives ``""``.

    Raises:
        DurationParseError: when any numeric part is malformed.
    """
    value = (duration or "").strip()
    if not value:
        return ""

    slices = value.split(":")
    if len(slices) == 3:
        hours, minutes, seconds = (_parse_segment(s, value) for s in slices)
    else:
        total = _parse_segment(value, value)
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
