"""Application state and Jinja2 templates shared by routers and the site builder."""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from livingmeta import __version__
from livingmeta.config import Settings
from livingmeta.database.repository import SnapshotRepository
from livingmeta.models.taxonomy import label
from livingmeta.services.feed_service import relative_date
from livingmeta.services.reference_service import PAPER_LINK, format_author_ap, link_references
from livingmeta.services.search_service import SORT_LABELS
from livingmeta.utils.text import clean_abstract, doi_url, truncate


# ============================================================================
# Per-app State
# ============================================================================


@dataclass
class AppState:
    """Services for one app instance, stored on ``app.state.ctx``.

    The repository is built by the caller (``create_app``) and injected,
    never looked up from a module global.
    """

    settings: Settings
    repo: SnapshotRepository


def get_state(request: Request) -> AppState:
    """FastAPI dependency returning the app's :class:`AppState`."""
    return request.app.state.ctx


# ============================================================================
# Templates & Filters
# ============================================================================

base_dir = os.path.dirname(__file__)
templates = Jinja2Templates(directory=os.path.join(base_dir, "templates"))


def format_date(date_str: Optional[str]) -> str:
    """Format date string to '11 February 2026' style."""
    if not date_str:
        return ""
    try:
        dt = datetime.fromisoformat(date_str.replace("Z", "+00:00").split("+")[0])
        return f"{dt.day} {dt:%B %Y}"
    except ValueError:
        return date_str[:10]


templates.env.filters["label"] = lambda code, facet: label(facet, code)
templates.env.filters["author_ap"] = format_author_ap
templates.env.filters["clean_abstract"] = clean_abstract
templates.env.filters["truncate_text"] = truncate
templates.env.filters["format_date"] = format_date
templates.env.filters["relative_date"] = relative_date
templates.env.filters["doi_url"] = doi_url
templates.env.filters["link_refs"] = link_references
templates.env.globals["sort_labels"] = SORT_LABELS
templates.env.globals["version"] = __version__
# Overridden per render by the static site builder
templates.env.globals["ref_link"] = PAPER_LINK
templates.env.globals["static"] = False
