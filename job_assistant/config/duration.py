"""Duration strings for cache TTLs: "24h", "90m", "1d12h" or ISO-8601 "PT24H"."""

import re

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

_HUMAN_RE = re.compile(r"(\d+)([smhd])")
_ISO_RE = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$")


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""


def parse_duration(value: str) -> int:
    """Parse a duration string into whole seconds.

    Examples:
        >>> parse_duration("24h")
        86400
        >>> parse_duration("PT15M")
        900
        >>> parse_duration("1d12h")
        129600
    """
    text = re.sub(r"\s+", "", value or "").lower()
    if not text:
        raise DurationParseError("Duration string cannot be empty")

    if text.startswith("p"):
        match = _ISO_RE.match(text.upper())
        if not match:
            raise DurationParseError(
                f"Invalid ISO-8601 duration: '{value}'. Expected e.g. 'PT24H', 'P1D', 'PT15M'"
            )
        days, hours, minutes, seconds = match.groups()
        total = (
            int(days or 0) * 86400
            + int(hours or 0) * 3600
            + int(minutes or 0) * 60
            + int(float(seconds or 0))
        )
    else:
        parts = _HUMAN_RE.findall(text)
        if not parts or "".join(num + unit for num, unit in parts) != text:
            raise DurationParseError(
                f"Invalid duration: '{value}'. Use digits with s, m, h or d, e.g. '24h' or '1h30m'"
            )
        total = sum(int(num) * _UNIT_SECONDS[unit] for num, unit in parts)

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{value}'")
    return total


def describe_seconds(seconds: int) -> str:
    """Largest whole unit, e.g. 86400 -> '1 day', 5400 -> '90 minutes'."""
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size and seconds % size == 0:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"


def validate_duration_range(seconds: int, min_seconds: int, max_seconds: int, label: str = "Duration") -> None:
    """Raise DurationParseError if ``seconds`` falls outside [min_seconds, max_seconds]."""
    if seconds < min_seconds:
        raise DurationParseError(
            f"{label} too short: {describe_seconds(seconds)}. Minimum is {describe_seconds(min_seconds)}."
        )
    if seconds > max_seconds:
        raise DurationParseError(
            f"{label} too long: {describe_seconds(seconds)}. Maximum is {describe_seconds(max_seconds)}."
        )
