"""Sources feed helpers: time grouping and relative dates."""

from datetime import datetime, timezone
from typing import Optional, Sequence

from dateutil import parser as dtparser

from livingmeta.models.content import FeedItem

PERIODS = ("Today", "This Week", "This Month", "Earlier")


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a snapshot date/datetime string into an aware UTC datetime."""
    if not value:
        return None
    try:
        dt = dtparser.parse(value)
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def time_group(value: Optional[str], now: Optional[datetime] = None) -> str:
    """Bucket a date into Today / This Week / This Month / Earlier.

    Missing or unparsable dates are "Earlier".
    """
    dt = parse_date(value)
    if dt is None:
        return "Earlier"
    diff_days = (_now(now) - dt).total_seconds() / 86400
    if diff_days < 1:
        return "Today"
    if diff_days < 7:
        return "This Week"
    if diff_days < 30:
        return "This Month"
    return "Earlier"


def relative_date(value: Optional[str], now: Optional[datetime] = None) -> str:
    """Short relative age: ``just now``, ``5m ago``, ``yesterday``, ``2mo ago``..."""
    dt = parse_date(value)
    if dt is None:
        return ""
    seconds = int((_now(now) - dt).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 365:
        return f"{days // 365}y ago"
    if days > 30:
        return f"{days // 30}mo ago"
    if days > 0:
        return "yesterday" if days == 1 else f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "just now"


def group_by_period(
    items: Sequence[FeedItem],
    now: Optional[datetime] = None,
) -> list[tuple[str, list[FeedItem]]]:
    """Group *items* by :func:`time_group`, keeping order; empty groups dropped."""
    groups: dict[str, list[FeedItem]] = {label: [] for label in PERIODS}
    for item in items:
        groups[time_group(item.pub_date, now)].append(item)
    return [(label, groups[label]) for label in PERIODS if groups[label]]
