"""Paper list page and CSV / BibTeX downloads of the current selection."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from livingmeta.gui.helpers import paper_list_context
from livingmeta.gui.state import AppState, get_state, templates
from livingmeta.services.browse_state import from_params, select
from livingmeta.services.export_service import EXPORT_FORMATS, export_filename, render_export

router = APIRouter()


# ============================================================================
# Paper List
# ============================================================================


@router.get("/papers", response_class=HTMLResponse)
async def papers_page(request: Request, ctx: AppState = Depends(get_state)):
    """Filtered, sorted, paginated paper list.

    Query parameters mirror :class:`BrowseState`: ``q``, ``paper``, one
    parameter per facet, flags, ``year_from``/``year_to``, ``sort``, ``page``.
    """
    state = from_params(request.query_params)
    return templates.TemplateResponse(
        request,
        "papers.html",
        {
            "site_title": ctx.settings.site_title,
            **paper_list_context(ctx.repo, state, ctx.settings.page_size),
        },
    )


# ============================================================================
# Exports
# ============================================================================


def _export_response(request: Request, ctx: AppState, fmt: str) -> Response:
    """All papers matching the current filters (not just one page)."""
    papers = select(ctx.repo.papers(), from_params(request.query_params))
    media_type = EXPORT_FORMATS[fmt][1]
    return Response(
        content=render_export(papers, fmt),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(fmt)}"'},
    )


@router.get("/papers/export.csv")
async def export_csv(request: Request, ctx: AppState = Depends(get_state)):
    return _export_response(request, ctx, "csv")


@router.get("/papers/export.bib")
async def export_bib(request: Request, ctx: AppState = Depends(get_state)):
    return _export_response(request, ctx, "bib")
