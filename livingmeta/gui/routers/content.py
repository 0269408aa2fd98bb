"""Editorial pages: research gaps, the sources feed and the blog."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from livingmeta.gui.helpers import feed_context, gaps_context
from livingmeta.gui.state import AppState, get_state, templates
from livingmeta.services.browse_state import FEED_FACETS, from_params

router = APIRouter()


# ============================================================================
# Research Gaps
# ============================================================================


@router.get("/gaps", response_class=HTMLResponse)
async def gaps_page(request: Request, ctx: AppState = Depends(get_state)):
    """Gap analyses with inline paper references linked to the paper list."""
    return templates.TemplateResponse(
        request,
        "gaps.html",
        {"site_title": ctx.settings.site_title, **gaps_context(ctx.repo)},
    )


# ============================================================================
# Sources Feed
# ============================================================================


@router.get("/sources", response_class=HTMLResponse)
async def sources_page(
    request: Request,
    ctx: AppState = Depends(get_state),
    show: int = Query(30, ge=1, description="Number of items to show"),
):
    """Latest feed items grouped by Today / This Week / This Month / Earlier."""
    state = from_params(request.query_params, facets=FEED_FACETS, flags=(), ranges={})
    return templates.TemplateResponse(
        request,
        "sources.html",
        {"site_title": ctx.settings.site_title, **feed_context(ctx.repo, state, show)},
    )


# ============================================================================
# Blog
# ============================================================================


@router.get("/blog", response_class=HTMLResponse)
async def blog_index(request: Request, ctx: AppState = Depends(get_state)):
    return templates.TemplateResponse(
        request,
        "blog.html",
        {"site_title": ctx.settings.site_title, "posts": ctx.repo.blog_posts()},
    )


@router.get("/blog/{slug}", response_class=HTMLResponse)
async def blog_post(request: Request, slug: str, ctx: AppState = Depends(get_state)):
    post = ctx.repo.find_blog_post(slug)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Blog post '{slug}' not found")
    related = ctx.repo.find_gap_analysis(post.related_gap_slug) if post.related_gap_slug else None
    return templates.TemplateResponse(
        request,
        "blog_post.html",
        {
            "site_title": ctx.settings.site_title,
            "post": post,
            "related_gap": related,
            "paper_index": ctx.repo.paper_index(),
        },
    )
