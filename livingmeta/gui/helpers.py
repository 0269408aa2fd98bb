"""Template context builders shared by the web routers and the static builder."""

from typing import Any, Callable, Optional
from urllib.parse import urlencode

from livingmeta.database.repository import SnapshotRepository
from livingmeta.services.browse_state import (
    FEED_FACETS,
    PAPER_FACETS,
    PAPER_FLAGS,
    RESOURCE_FACETS,
    RESOURCE_FLAGS,
    BrowseState,
    select,
)
from livingmeta.services.feed_service import group_by_period
from livingmeta.services.pagination import clamp_page, page_count, paginate
from livingmeta.services.search_service import (
    FEED_SEARCH_FIELDS,
    RESOURCE_SEARCH_FIELDS,
    facet_counts,
    facet_values,
    sort_records,
)

PageUrl = Callable[[int], str]


def query_url(path: str, params: dict[str, str]) -> str:
    """``path`` plus an encoded query string (no ``?`` when empty)."""
    return f"{path}?{urlencode(params)}" if params else path


def paper_page_url(state: BrowseState) -> PageUrl:
    """Zero-based page index → ``/papers?...&page=N`` keeping the filters."""
    return lambda page: query_url("/papers", state.to_params(page=page))


def paper_list_context(
    repo: SnapshotRepository,
    state: BrowseState,
    page_size: int,
    page_url: Optional[PageUrl] = None,
) -> dict[str, Any]:
    """Everything ``papers.html`` needs for one filtered, paginated view.

    The requested page is clamped into range, so a filter that shrinks the
    result below the current page shows the last page instead of nothing.
    """
    all_papers = repo.papers()
    results = select(all_papers, state)
    page_index = clamp_page(state.page, page_count(len(results), page_size))
    page = paginate(results, page_size, page_index)
    page_url = page_url or paper_page_url(state)

    return {
        "state": state,
        "page": page,
        "page_url": page_url,
        "total_papers": len(all_papers),
        "export_params": urlencode(state.to_params(page=0)),
        "options": {
            "sport": facet_values(all_papers, "sport"),
            "theme": facet_values(all_papers, "theme"),
            "methodology": facet_values(all_papers, "methodology"),
            "content_type": facet_values(all_papers, "content_type"),
            "journal": repo.journals(),
        },
        "facets": PAPER_FACETS,
        "flags": PAPER_FLAGS,
        "full_text_count": sum(1 for p in all_papers if p.has_full_text),
        "paper_index": repo.paper_index(),
    }


def resource_list_context(repo: SnapshotRepository, state: BrowseState) -> dict[str, Any]:
    """Context for ``resources.html``: filtered resources grouped by category."""
    all_resources = repo.resources()
    results = select(all_resources, state, RESOURCE_SEARCH_FIELDS)

    grouped: dict[str, list] = {}
    for resource in results:
        grouped.setdefault(resource.category, []).append(resource)

    return {
        "state": state,
        "resources": results,
        "grouped": sorted(grouped.items()),
        "total_resources": len(all_resources),
        "options": {
            "category": facet_values(all_resources, "category"),
            "access": facet_values(all_resources, "access"),
            "sports": facet_values(all_resources, "sports"),
        },
        "facets": RESOURCE_FACETS,
        "flags": RESOURCE_FLAGS,
        "papers_by_id": {
            key: p for p in repo.papers() for key in (p.short_id, p.work_id)
        },
    }


def feed_context(
    repo: SnapshotRepository,
    state: BrowseState,
    show_count: int = 30,
) -> dict[str, Any]:
    """Context for ``sources.html``: the latest items grouped by period."""
    all_items = repo.feed_items()
    results = select(all_items, state, FEED_SEARCH_FIELDS)
    visible = results[:show_count]
    return {
        "state": state,
        "groups": group_by_period(visible),
        "shown": len(visible),
        "total": len(results),
        "total_items": len(all_items),
        "source_count": len({i.source_name for i in all_items if i.source_name}),
        "sport_options": facet_counts(all_items, "sport"),
        "content_type_options": facet_counts(all_items, "content_type"),
        "facets": FEED_FACETS,
        "more_url": query_url(
            "/sources", {**state.to_params(page=0), "show": str(show_count + 30)}
        ),
    }


def gaps_context(repo: SnapshotRepository) -> dict[str, Any]:
    return {
        "analyses": repo.gap_analyses(),
        "paper_index": repo.paper_index(),
    }


def home_context(repo: SnapshotRepository, latest: int = 5) -> dict[str, Any]:
    """Context for ``index.html``: headline stats plus the newest papers and posts."""
    return {
        "stats": repo.stats(),
        "latest_papers": sort_records(repo.papers(), "date")[:latest],
        "recent_posts": repo.blog_posts()[:3],
        "resource_count": len(repo.resources()),
        "analysis_count": len(repo.gap_analyses()),
    }
