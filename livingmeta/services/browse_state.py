"""Filter state for the browse pages as a pure reducer.

The web routers, the CLI and the static builder all turn their input
(query parameters, argv) into a :class:`BrowseState`, then run
:func:`select` to get the filtered, sorted records.  State only changes
through :func:`reduce`::

    state = reduce(BrowseState(), SetFacet("sport", "tennis"))
    state = reduce(state, SetPage(2))
"""

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence, TypeVar, Union

from livingmeta.services.search_service import (
    DEFAULT_SORT,
    PAPER_SEARCH_FIELDS,
    SORT_LABELS,
    FilterConfig,
    filter_records,
    find_by_work_id,
    sort_records,
)

R = TypeVar("R")

PAPER_FACETS = ("sport", "theme", "methodology", "content_type", "journal")
PAPER_FLAGS = ("is_womens_sport", "has_full_text", "open_access")
# URL parameter prefix → record field
PAPER_RANGES = {"year": "pub_year"}

RESOURCE_FACETS = ("category", "access", "sports")
RESOURCE_FLAGS = ("is_on_platform",)

FEED_FACETS = ("content_type", "sport")

_TRUE_VALUES = ("1", "true", "on", "yes")


@dataclass(frozen=True)
class BrowseState:
    """Everything the user can set on a browse page.

    ``page`` is zero-based here; URLs carry it one-based.
    """

    query: str = ""
    paper_id: str = ""
    facets: Mapping[str, str] = field(default_factory=dict)
    flags: Mapping[str, bool] = field(default_factory=dict)
    ranges: Mapping[str, tuple[Optional[float], Optional[float]]] = field(default_factory=dict)
    sort: str = DEFAULT_SORT
    page: int = 0

    @property
    def active_filter_count(self) -> int:
        """Number of active controls; a non-default sort counts as one."""
        count = 1 if self.query else 0
        count += sum(1 for v in self.facets.values() if v)
        count += sum(1 for v in self.flags.values() if v)
        count += sum(
            1 for low, high in self.ranges.values() if low is not None or high is not None
        )
        if self.sort != DEFAULT_SORT:
            count += 1
        return count

    def to_filter_config(self, search_fields: Sequence[str] = PAPER_SEARCH_FIELDS) -> FilterConfig:
        return FilterConfig(
            query=self.query,
            search_fields=tuple(search_fields),
            categorical=dict(self.facets),
            flags=dict(self.flags),
            ranges=dict(self.ranges),
        )

    def to_params(self, page: Optional[int] = None, range_params: Mapping[str, str] = PAPER_RANGES) -> dict[str, str]:
        """Query parameters that rebuild this state (pagination/export links)."""
        params: dict[str, str] = {}
        if self.query:
            params["q"] = self.query
        if self.paper_id:
            params["paper"] = self.paper_id
        for name, value in self.facets.items():
            if value:
                params[name] = value
        for name, value in self.flags.items():
            if value:
                params[name] = "1"
        for prefix, field_name in range_params.items():
            low, high = self.ranges.get(field_name, (None, None))
            if low is not None:
                params[f"{prefix}_from"] = _format_bound(low)
            if high is not None:
                params[f"{prefix}_to"] = _format_bound(high)
        if self.sort != DEFAULT_SORT:
            params["sort"] = self.sort
        page = self.page if page is None else page
        if page:
            params["page"] = str(page + 1)
        return params


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SetQuery:
    query: str


@dataclass(frozen=True)
class SetPaperId:
    paper_id: str


@dataclass(frozen=True)
class SetFacet:
    """Set a categorical filter; an empty value clears it."""

    name: str
    value: str


@dataclass(frozen=True)
class ToggleFlag:
    name: str


@dataclass(frozen=True)
class SetRange:
    name: str
    low: Optional[float] = None
    high: Optional[float] = None


@dataclass(frozen=True)
class SetSort:
    key: str


@dataclass(frozen=True)
class SetPage:
    page: int


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[SetQuery, SetPaperId, SetFacet, ToggleFlag, SetRange, SetSort, SetPage, Reset]


def reduce(state: BrowseState, action: Action) -> BrowseState:
    """Return the state after *action*; *state* itself is never modified.

    Any change to filters or sort order returns to the first page.
    """
    if isinstance(action, SetPage):
        return replace(state, page=max(0, action.page))
    if isinstance(action, Reset):
        return BrowseState()
    if isinstance(action, SetQuery):
        return replace(state, query=action.query.strip(), page=0)
    if isinstance(action, SetPaperId):
        return replace(state, paper_id=action.paper_id.strip(), page=0)
    if isinstance(action, SetFacet):
        facets = {k: v for k, v in state.facets.items() if k != action.name}
        if action.value:
            facets[action.name] = action.value
        return replace(state, facets=facets, page=0)
    if isinstance(action, ToggleFlag):
        flags = dict(state.flags)
        if flags.get(action.name):
            del flags[action.name]
        else:
            flags[action.name] = True
        return replace(state, flags=flags, page=0)
    if isinstance(action, SetRange):
        ranges = {k: v for k, v in state.ranges.items() if k != action.name}
        if action.low is not None or action.high is not None:
            ranges[action.name] = (action.low, action.high)
        return replace(state, ranges=ranges, page=0)
    if isinstance(action, SetSort):
        key = action.key if action.key in SORT_LABELS else DEFAULT_SORT
        return replace(state, sort=key, page=0)
    raise TypeError(f"Unknown action: {action!r}")


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

def _format_bound(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _parse_number(value: Any) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def from_params(
    params: Mapping[str, Any],
    facets: Sequence[str] = PAPER_FACETS,
    flags: Sequence[str] = PAPER_FLAGS,
    ranges: Mapping[str, str] = PAPER_RANGES,
) -> BrowseState:
    """Build state from request query parameters.

    Recognized: ``q`` (or ``search``), ``paper``, one parameter per facet,
    flags as ``1/true/on``, ``<range>_from`` / ``<range>_to``, ``sort`` and
    a one-based ``page``.  Unknown or malformed values are ignored.
    """
    state = BrowseState()
    query = params.get("q") or params.get("search") or ""
    if query:
        state = reduce(state, SetQuery(str(query)))
    if params.get("paper"):
        state = reduce(state, SetPaperId(str(params["paper"])))
    for name in facets:
        value = params.get(name)
        if value and value != "all":
            state = reduce(state, SetFacet(name, str(value)))
    for name in flags:
        if str(params.get(name, "")).lower() in _TRUE_VALUES:
            state = reduce(state, ToggleFlag(name))
    for prefix, field_name in ranges.items():
        low = _parse_number(params.get(f"{prefix}_from"))
        high = _parse_number(params.get(f"{prefix}_to"))
        if low is not None or high is not None:
            state = reduce(state, SetRange(field_name, low, high))
    if params.get("sort"):
        state = reduce(state, SetSort(str(params["sort"])))
    try:
        page = int(params.get("page") or 1) - 1
    except (TypeError, ValueError):
        page = 0
    return reduce(state, SetPage(page))


def select(
    records: Sequence[R],
    state: BrowseState,
    search_fields: Sequence[str] = PAPER_SEARCH_FIELDS,
) -> list[R]:
    """Filtered and sorted records for *state*.

    A ``paper_id`` that matches takes priority over every other control;
    when it matches nothing the normal search runs.
    """
    if state.paper_id:
        direct = find_by_work_id(records, state.paper_id)
        if direct:
            return direct
    filtered = filter_records(records, state.to_filter_config(search_fields))
    return sort_records(filtered, state.sort)
