"""Render the whole site to static HTML files.

Uses the web app's Jinja2 environment and context builders, so the static
pages match what ``/papers``, ``/gaps`` and friends serve.  Filter forms are
hidden (``static=True``); paper lists are pre-paginated under
``papers/page/<n>/`` and inline references link to OpenAlex.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from livingmeta.config import Settings
from livingmeta.database.repository import SnapshotRepository
from livingmeta.gui.helpers import (
    feed_context,
    gaps_context,
    home_context,
    paper_list_context,
    resource_list_context,
)
from livingmeta.gui.state import templates
from livingmeta.services.browse_state import BrowseState, SetPage, reduce
from livingmeta.services.export_service import EXPORT_FORMATS, export_filename, render_export
from livingmeta.services.pagination import page_count

logger = logging.getLogger(__name__)

OPENALEX_LINK = "https://openalex.org/works/{id}"


def static_page_url(page: int) -> str:
    """Zero-based page index → static papers page path."""
    return "/papers/" if page == 0 else f"/papers/page/{page + 1}/"


class SiteBuilder:
    """Write every page of the site under an output directory."""

    def __init__(self, repo: SnapshotRepository, settings: Settings):
        self.repo = repo
        self.settings = settings
        self.written: list[Path] = []
        self._on_page: Optional[Callable[[Path], None]] = None

    def build(
        self,
        out_dir: Optional[Path] = None,
        on_page: Optional[Callable[[Path], None]] = None,
    ) -> list[Path]:
        """Render all pages and downloads.

        Args:
            out_dir: Target directory (defaults to ``settings.site_dir``)
            on_page: Called with each written file (progress reporting)

        Returns:
            Paths of all written files
        """
        out_dir = Path(out_dir or self.settings.site_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        self.written = []
        self._on_page = on_page

        self._render(out_dir / "index.html", "index.html", home_context(self.repo))
        self._build_papers(out_dir)
        self._render(
            out_dir / "resources" / "index.html",
            "resources.html",
            resource_list_context(self.repo, BrowseState()),
        )
        self._render(out_dir / "gaps" / "index.html", "gaps.html", gaps_context(self.repo))
        self._render(
            out_dir / "sources" / "index.html",
            "sources.html",
            feed_context(self.repo, BrowseState(), show_count=len(self.repo.feed_items())),
        )
        self._build_blog(out_dir)
        self._render(out_dir / "stats" / "index.html", "stats.html", {"stats": self.repo.stats()})

        papers = self.repo.papers()
        for fmt in EXPORT_FORMATS:
            self._write(out_dir / export_filename(fmt), render_export(papers, fmt))

        logger.info("Built %d files into %s", len(self.written), out_dir)
        return self.written

    # ── Sections ──────────────────────────────────────────────────────

    def _build_papers(self, out_dir: Path) -> None:
        page_size = self.settings.page_size
        pages = max(1, page_count(len(self.repo.papers()), page_size))
        state = BrowseState()
        for index in range(pages):
            state = reduce(state, SetPage(index))
            context = paper_list_context(self.repo, state, page_size, static_page_url)
            target = out_dir / static_page_url(index).strip("/") / "index.html"
            self._render(target, "papers.html", context)

    def _build_blog(self, out_dir: Path) -> None:
        posts = self.repo.blog_posts()
        self._render(out_dir / "blog" / "index.html", "blog.html", {"posts": posts})
        paper_index = self.repo.paper_index()
        for post in posts:
            if not post.slug:
                logger.warning("Skipping blog post without slug: %s", post.title)
                continue
            related = (
                self.repo.find_gap_analysis(post.related_gap_slug)
                if post.related_gap_slug
                else None
            )
            self._render(
                out_dir / "blog" / post.slug / "index.html",
                "blog_post.html",
                {"post": post, "related_gap": related, "paper_index": paper_index},
            )

    # ── Private ───────────────────────────────────────────────────────

    def _render(self, target: Path, template_name: str, context: dict[str, Any]) -> None:
        template = templates.get_template(template_name)
        html = template.render(
            site_title=self.settings.site_title,
            static=True,
            ref_link=OPENALEX_LINK,
            **context,
        )
        self._write(target, html)

    def _write(self, target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self.written.append(target)
        logger.debug("Wrote %s", target)
        if self._on_page:
            self._on_page(target)
