"""
Date coercion between server instants and local schedule inputs.

Server instants are timezone-aware UTC datetimes. The schedule input holds a
wall-clock string ("YYYY-MM-DDTHH:MM") in the display timezone with no offset.
"""
from datetime import datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

LOCAL_INPUT_FORMAT = "%Y-%m-%dT%H:%M"


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve an IANA timezone name.

    Args:
        name: Timezone name such as "UTC" or "Europe/Paris"

    Returns:
        tzinfo instance
    """
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_instant(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a server timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings with a trailing "Z". Naive values are taken as UTC.

    Args:
        value: ISO string, datetime or None

    Returns:
        Aware UTC datetime, or None for empty input
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_instant(value: Optional[datetime]) -> Optional[str]:
    """
    Format an instant for the server as "YYYY-MM-DDTHH:MM:SSZ".

    Args:
        value: Datetime (naive values are taken as UTC) or None

    Returns:
        Formatted string or None
    """
    instant = parse_instant(value)
    if instant is None:
        return None
    return instant.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def to_local_input(value: Union[str, datetime, None], tz: tzinfo = timezone.utc) -> str:
    """
    Convert a server instant into a local schedule input string.

    Seconds and below are truncated.

    Args:
        value: Instant as ISO string or datetime, or None
        tz: Display timezone

    Returns:
        "YYYY-MM-DDTHH:MM" string, or "" when there is no instant
    """
    instant = parse_instant(value)
    if instant is None:
        return ""
    return instant.astimezone(tz).strftime(LOCAL_INPUT_FORMAT)


def from_local_input(value: Optional[str], tz: tzinfo = timezone.utc,
                     prefer: Optional[datetime] = None) -> Optional[datetime]:
    """
    Convert a local schedule input string into an aware UTC instant.

    A wall-clock time repeated by a DST fall-back has two instants. The one
    that converts back to the same local value is chosen, and `prefer` wins
    when it is one of them. Times skipped by a spring-forward resolve with
    fold=0.

    Args:
        value: "YYYY-MM-DDTHH:MM" string (seconds are tolerated), or ""
        tz: Display timezone the wall-clock value is expressed in
        prefer: Instant to keep when the value is ambiguous, e.g. the loaded one

    Returns:
        Aware UTC datetime, or None for an empty value

    Raises:
        ValueError: If the value is not a valid local date and time
    """
    if value is None or not value.strip():
        return None
    local = datetime.fromisoformat(value.strip())
    if local.tzinfo is not None:
        raise ValueError(f"Local schedule value must not carry an offset: {value}")
    local = local.replace(second=0, microsecond=0, tzinfo=tz)
    wall_clock = local.strftime(LOCAL_INPUT_FORMAT)

    candidates = []
    for fold in (0, 1):
        instant = local.replace(fold=fold).astimezone(timezone.utc)
        if instant.astimezone(tz).strftime(LOCAL_INPUT_FORMAT) == wall_clock and instant not in candidates:
            candidates.append(instant)
    if not candidates:
        return local.astimezone(timezone.utc)

    preferred = parse_instant(prefer)
    if preferred is not None:
        preferred = preferred.replace(second=0, microsecond=0)
        if preferred in candidates:
            return preferred
    return candidates[0]


def min_schedule_local(now: datetime, tz: tzinfo = timezone.utc) -> str:
    """
    Earliest selectable schedule value for the given moment.

    Args:
        now: Current instant
        tz: Display timezone

    Returns:
        "YYYY-MM-DDTHH:MM" string for now
    """
    return to_local_input(now, tz)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
