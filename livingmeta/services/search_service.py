"""In-memory faceted search: filtering, sorting and facet counts.

Works on any record type (papers, resources, feed items): fields are read
with ``getattr`` so a missing or ``None`` attribute simply does not match.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, TypeVar

from livingmeta.models.paper import short_work_id

R = TypeVar("R")

PAPER_SEARCH_FIELDS = (
    "title",
    "abstract",
    "ai_summary",
    "sub_theme",
    "first_author_name",
    "primary_topic",
)
RESOURCE_SEARCH_FIELDS = ("name", "description", "category")
FEED_SEARCH_FIELDS = ("title", "source_name", "summary")

# Sort option → record attribute
SORT_FIELDS = {
    "citations": "cited_by_count",
    "fwci": "fwci",
    "citations_per_year": "citations_per_year",
    "journal_impact": "journal_if_proxy",
}

SORT_LABELS = {
    "date": "Date (newest)",
    "citations": "Citations (most)",
    "fwci": "FWCI (highest)",
    "citations_per_year": "Citations/year",
    "journal_impact": "Journal Impact",
}

DEFAULT_SORT = "date"

Range = tuple[Optional[float], Optional[float]]


@dataclass(frozen=True)
class FilterConfig:
    """Active predicates; every empty value is a no-op.

    Attributes:
        query: Free-text query, matched case-insensitively as a substring
        search_fields: Fields the query is matched against (any may match)
        categorical: field → required value (list fields: membership)
        flags: field → True when the field must be truthy
        ranges: field → (min, max), inclusive, either bound optional
    """

    query: str = ""
    search_fields: Sequence[str] = PAPER_SEARCH_FIELDS
    categorical: dict[str, Optional[str]] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)
    ranges: dict[str, Range] = field(default_factory=dict)


def matches_query(record: Any, query: str, search_fields: Sequence[str]) -> bool:
    """True when *query* occurs in any of *search_fields* (case-insensitive)."""
    q = query.strip().lower()
    if not q:
        return True
    for name in search_fields:
        value = getattr(record, name, None)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if any(q in str(v).lower() for v in value):
                return True
        elif q in str(value).lower():
            return True
    return False


def _matches_category(record: Any, name: str, wanted: str) -> bool:
    value = getattr(record, name, None)
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, frozenset)):
        return wanted in value
    return value == wanted


def _in_range(record: Any, name: str, bounds: Range) -> bool:
    low, high = bounds
    if low is None and high is None:
        return True
    value = getattr(record, name, None)
    if value is None or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    if low is not None and number < low:
        return False
    if high is not None and number > high:
        return False
    return True


def matches(record: Any, config: FilterConfig) -> bool:
    """AND of every active predicate in *config*."""
    if config.query and not matches_query(record, config.query, config.search_fields):
        return False
    for name, wanted in config.categorical.items():
        if wanted and not _matches_category(record, name, wanted):
            return False
    for name, required in config.flags.items():
        if required and not getattr(record, name, None):
            return False
    for name, bounds in config.ranges.items():
        if not _in_range(record, name, bounds):
            return False
    return True


def filter_records(records: Iterable[R], config: FilterConfig) -> list[R]:
    """Return the records satisfying *config*, in input order.

    Args:
        records: Records to filter (never modified)
        config: Active predicates

    Returns:
        New list with the matching records
    """
    return [r for r in records if matches(r, config)]


def _date_key(record: Any) -> Optional[str]:
    pub_date = getattr(record, "pub_date", None)
    if pub_date:
        return str(pub_date)[:10]
    year = getattr(record, "pub_year", None)
    if year:
        return f"{int(year):04d}"
    return None


def sort_records(records: Iterable[R], key: str = DEFAULT_SORT, descending: bool = True) -> list[R]:
    """Stable sort by *key*; records without a value always go last.

    Args:
        records: Records to sort (never modified)
        key: 'date', a sort option from ``SORT_FIELDS``, or an attribute name
        descending: Largest/newest first (default)

    Returns:
        New sorted list
    """
    if key == "date":
        def get(record: Any) -> Any:
            return _date_key(record)
    else:
        attr = SORT_FIELDS.get(key, key)

        def get(record: Any) -> Any:
            value = getattr(record, attr, None)
            return None if isinstance(value, str) and not value else value

    items = list(records)
    present = [r for r in items if get(r) is not None]
    missing = [r for r in items if get(r) is None]
    present.sort(key=get, reverse=descending)
    return present + missing


def facet_counts(records: Iterable[Any], field_name: str) -> list[tuple[str, int]]:
    """Count records per value of *field_name*, most frequent first.

    List-valued fields count once per member; absent values are skipped.
    """
    counts: Counter = Counter()
    for record in records:
        value = getattr(record, field_name, None)
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            counts.update(str(v) for v in value if v)
        else:
            counts[str(value)] += 1
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def facet_values(records: Iterable[Any], field_name: str) -> list[str]:
    """Distinct values of *field_name*, sorted (filter dropdown options)."""
    return sorted(value for value, _count in facet_counts(records, field_name))


def find_by_work_id(records: Iterable[R], work_id: str) -> list[R]:
    """Direct paper lookup: exact ``work_id`` first, then by short id suffix.

    Returns an empty list when nothing matches so callers can fall back to
    the normal search.
    """
    items = list(records)
    exact = [r for r in items if getattr(r, "work_id", None) == work_id]
    if exact:
        return exact
    wanted = short_work_id(work_id)
    if not wanted:
        return []
    return [r for r in items if str(getattr(r, "work_id", "") or "").endswith(wanted)]
