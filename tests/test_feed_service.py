from datetime import datetime, timezone

from livingmeta.models.content import FeedItem
from livingmeta.services.feed_service import group_by_period, parse_date, relative_date, time_group

NOW = datetime(2026, 2, 11, 12, 0, tzinfo=timezone.utc)


def test_time_group() -> None:
    assert time_group("2026-02-11T08:00:00Z", NOW) == "Today"
    assert time_group("2026-02-08", NOW) == "This Week"
    assert time_group("2026-01-20", NOW) == "This Month"
    assert time_group("2025-06-01", NOW) == "Earlier"
    assert time_group(None, NOW) == "Earlier"
    assert time_group("not a date", NOW) == "Earlier"


def test_relative_date() -> None:
    assert relative_date("2026-02-11T11:59:30Z", NOW) == "just now"
    assert relative_date("2026-02-11T11:15:00Z", NOW) == "45m ago"
    assert relative_date("2026-02-11T07:00:00Z", NOW) == "5h ago"
    assert relative_date("2026-02-10T10:00:00Z", NOW) == "yesterday"
    assert relative_date("2026-02-01T12:00:00Z", NOW) == "10d ago"
    assert relative_date("2025-11-01T12:00:00Z", NOW) == "3mo ago"
    assert relative_date("2023-01-01T12:00:00Z", NOW) == "3y ago"
    assert relative_date(None, NOW) == ""


def test_naive_dates_are_utc() -> None:
    assert parse_date("2026-02-11").tzinfo is not None


def test_group_by_period_keeps_order_and_drops_empty() -> None:
    items = [
        FeedItem(title="a", url="u1", pub_date="2026-02-11T10:00:00Z"),
        FeedItem(title="b", url="u2", pub_date="2024-01-01"),
        FeedItem(title="c", url="u3", pub_date="2026-02-11T09:00:00Z"),
    ]
    groups = group_by_period(items, NOW)
    assert [label for label, _ in groups] == ["Today", "Earlier"]
    assert [i.title for i in groups[0][1]] == ["a", "c"]
