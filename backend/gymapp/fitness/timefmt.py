from __future__ import annotations

from datetime import datetime, timedelta, timezone


def _as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_time(seconds: int) -> str:
    """Seconds as m:ss; minutes are not wrapped into hours (3661 -> 61:01)."""
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """Human duration: 30s, 45 min, 1h, 1h 30min."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours == 0:
        return f"{minutes} min"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}min"


def format_relative_date(value: datetime | str, now: datetime | None = None) -> str:
    when = _as_datetime(value)
    now = now or datetime.now(timezone.utc)
    diff_hours = int((now - when).total_seconds() // 3600)
    diff_days = diff_hours // 24
    if diff_hours < 1:
        return "Just now"
    if diff_hours < 24:
        return f"{diff_hours}h ago"
    if diff_days < 7:
        return f"{diff_days}d ago"
    local = when.astimezone()
    return f"{local:%b} {local.day}"


def is_within_days(value: datetime | str, days: int, now: datetime | None = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return _as_datetime(value) >= now - timedelta(days=days)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def get_day_name(value: datetime) -> str:
    return f"{value:%A}"
