"""Calendar-day helpers."""

from datetime import date, timedelta


def day_key(day: date) -> str:
    """Return the YYYY-MM-DD key used for per-day bucketing."""
    return day.isoformat()


def parse_day_key(value: str) -> date:
    """Parse a YYYY-MM-DD key."""
    return date.fromisoformat(value)


def is_today(day: date, today: date) -> bool:
    return day == today


def is_yesterday(day: date, today: date) -> bool:
    return day == today - timedelta(days=1)


def day_of_week(day: date) -> str:
    """Return the English weekday name."""
    return day.strftime("%A")


def format_day(day: date) -> str:
    """Return a short label such as 'October 19'."""
    return f"{day:%B} {day.day}"


def last_n_days(end: date, days: int) -> list[date]:
    """Return the inclusive window of `days` days ending at `end`, ascending."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
