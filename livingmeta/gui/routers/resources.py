"""Resources directory: datasets, scrapers, libraries, APIs and tools."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from livingmeta.gui.helpers import resource_list_context
from livingmeta.gui.state import AppState, get_state, templates
from livingmeta.services.browse_state import RESOURCE_FACETS, RESOURCE_FLAGS, from_params

router = APIRouter()


@router.get("/resources", response_class=HTMLResponse)
async def resources_page(request: Request, ctx: AppState = Depends(get_state)):
    """Resources grouped by category; ``q``, ``category``, ``access``, ``sports``
    and ``is_on_platform`` narrow the list."""
    state = from_params(
        request.query_params, facets=RESOURCE_FACETS, flags=RESOURCE_FLAGS, ranges={}
    )
    return templates.TemplateResponse(
        request,
        "resources.html",
        {
            "site_title": ctx.settings.site_title,
            **resource_list_context(ctx.repo, state),
        },
    )
