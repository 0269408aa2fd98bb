"""Common routes: home page, stats page and the JSON paper search API."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from livingmeta.gui.helpers import home_context
from livingmeta.gui.state import AppState, get_state, templates
from livingmeta.services.search_service import (
    FilterConfig,
    PAPER_SEARCH_FIELDS,
    filter_records,
    sort_records,
)

logger = logging.getLogger(__name__)

router = APIRouter()

API_DEFAULT_LIMIT = 25
API_MAX_LIMIT = 100


# ============================================================================
# Pages
# ============================================================================


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, ctx: AppState = Depends(get_state)):
    """Home page: headline numbers, latest papers and posts."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"site_title": ctx.settings.site_title, **home_context(ctx.repo)},
    )


@router.get("/stats", response_class=HTMLResponse)
async def stats_page(request: Request, ctx: AppState = Depends(get_state)):
    """Trends page: yearly output and classification distributions."""
    return templates.TemplateResponse(
        request,
        "stats.html",
        {"site_title": ctx.settings.site_title, "stats": ctx.repo.stats()},
    )


# ============================================================================
# JSON API
# ============================================================================


class PaperSearchResult(BaseModel):
    papers: list[dict[str, Any]]
    total: int
    journals: list[str]


def search_papers(
    ctx: AppState,
    q: str = "",
    journal: str = "",
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
    limit: int = API_DEFAULT_LIMIT,
    offset: int = 0,
) -> PaperSearchResult:
    """Newest-first papers matching *q*/*journal*/year bounds, sliced by offset."""
    low = float(year_from) if year_from else None
    high = float(year_to) if year_to else None
    config = FilterConfig(
        query=q,
        search_fields=PAPER_SEARCH_FIELDS,
        categorical={"journal": journal} if journal else {},
        ranges={"pub_year": (low, high)} if low or high else {},
    )
    results = sort_records(filter_records(ctx.repo.papers(), config), "date")

    limit = max(1, min(limit, API_MAX_LIMIT))
    offset = max(0, offset)
    page = results[offset:offset + limit]
    return PaperSearchResult(
        papers=[p.to_dict() for p in page],
        total=len(results),
        journals=ctx.repo.journals(),
    )


@router.get("/api/papers", response_model=PaperSearchResult)
async def api_papers(
    ctx: AppState = Depends(get_state),
    q: str = Query("", description="Search query"),
    journal: str = Query("", description="Exact journal name"),
    year_from: int = Query(0, alias="yearFrom", description="First year (0 = open)"),
    year_to: int = Query(0, alias="yearTo", description="Last year (0 = open)"),
    limit: int = Query(API_DEFAULT_LIMIT, description=f"Page size (max {API_MAX_LIMIT})"),
    offset: int = Query(0, description="Number of results to skip"),
):
    """Search papers as JSON."""
    try:
        return search_papers(ctx, q, journal, year_from, year_to, limit, offset)
    except Exception as e:
        logger.exception("Paper search failed")
        return JSONResponse(
            {"error": "Failed to search papers", "details": str(e)},
            status_code=500,
        )
