"""Command-line interface handlers."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from livingmeta.config import Settings
from livingmeta.console import ConsoleUI
from livingmeta.database.repository import SnapshotDatabase, SnapshotError, SnapshotRepository
from livingmeta.services.browse_state import (
    RESOURCE_FACETS,
    RESOURCE_FLAGS,
    BrowseState,
    from_params,
    select,
)
from livingmeta.services.export_service import EXPORT_FORMATS, PaperExporter
from livingmeta.services.pagination import clamp_page, page_count, paginate
from livingmeta.services.search_service import RESOURCE_SEARCH_FIELDS, SORT_LABELS

logger = logging.getLogger(__name__)


class LivingMetaCLI:
    """CLI application for living-meta."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        repository: Optional[SnapshotRepository] = None,
        ui: Optional[ConsoleUI] = None,
    ):
        """Initialize CLI with settings.

        Args:
            settings: Application settings (loads from .metadata/ if not provided)
            repository: Snapshot repository (built from settings.data_dir if not provided)
            ui: Console output (a default Rich console if not provided)
        """
        self.settings = settings or Settings.load()
        self.ui = ui or ConsoleUI()
        self.repo = repository or SnapshotRepository(self.settings.data_dir)

    def cmd_papers(self, state: BrowseState, page_size: Optional[int] = None) -> None:
        """List one page of papers matching *state*.

        Args:
            state: Filters, sort and (zero-based) page
            page_size: Rows per page (defaults to settings.page_size)
        """
        page_size = page_size or self.settings.page_size
        papers = self.repo.papers()
        results = select(papers, state)
        page_index = clamp_page(state.page, page_count(len(results), page_size))
        self.ui.display_papers(paginate(results, page_size, page_index), len(papers))

    def cmd_export(self, state: BrowseState, fmt: str = "csv", out_dir: Optional[Path] = None) -> None:
        """Export every paper matching *state* as CSV or BibTeX.

        Args:
            state: Filters and sort (the page is ignored)
            fmt: 'csv' or 'bib'
            out_dir: Target directory (defaults to settings.export_dir)
        """
        papers = select(self.repo.papers(), state)
        if not papers:
            self.ui.no_papers_to_export()
            return

        exporter = PaperExporter(out_dir or self.settings.export_dir)
        filepath = exporter.export(papers, fmt)
        count = len(papers) if fmt == "csv" else sum(1 for p in papers if p.doi)
        self.ui.exported(count, filepath)

    def cmd_resources(self, state: BrowseState) -> None:
        """List resources matching *state*."""
        resources = select(self.repo.resources(), state, RESOURCE_SEARCH_FIELDS)
        self.ui.display_resources(resources)

    def cmd_gaps(self, slug: Optional[str] = None) -> None:
        """Show gap analyses (one, by *slug*) with inline references resolved."""
        if slug:
            analysis = self.repo.find_gap_analysis(slug)
            if analysis is None:
                raise ValueError(f"Unknown gap analysis: {slug}")
            analyses = [analysis]
        else:
            analyses = self.repo.gap_analyses()
        self.ui.display_gap_analyses(analyses, self.repo.paper_index())

    def cmd_build(self, out_dir: Optional[Path] = None) -> None:
        """Render the static site into *out_dir* (defaults to settings.site_dir)."""
        from livingmeta.services.site_builder import SiteBuilder

        out_dir = Path(out_dir or self.settings.site_dir)
        builder = SiteBuilder(self.repo, self.settings)

        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            console=self.ui.console,
        ) as progress:
            task = progress.add_task("Building site...", total=None)

            def on_page(path: Path) -> None:
                progress.update(task, description=f"Wrote {path.relative_to(out_dir)}")

            written = builder.build(out_dir, on_page=on_page)

        self.ui.built(len(written), out_dir)

    def cmd_snapshot(self, db_path: Optional[Path] = None, data_dir: Optional[Path] = None) -> None:
        """Export the pipeline's SQLite database to the JSON snapshot."""
        from livingmeta.services.snapshot_service import export_snapshot

        db = SnapshotDatabase(db_path or self.settings.db_path)
        target = Path(data_dir or self.settings.data_dir)
        counts = export_snapshot(db, target)
        self.ui.snapshot_written(counts, target)

    def cmd_serve(self, host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
        """Start the web app with uvicorn."""
        import uvicorn

        self.ui.info(f"Serving {self.settings.data_dir} at http://{host}:{port}")
        uvicorn.run(
            "livingmeta.gui.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
        )


# ============================================================================
# Argument parsing
# ============================================================================


def _add_paper_filters(parser: argparse.ArgumentParser) -> None:
    """Filter options shared by ``papers`` and ``export``."""
    parser.add_argument("-q", "--query", default="", help="Search titles, abstracts, summaries")
    parser.add_argument("--paper", default="", help="Show one paper by OpenAlex id (W123...)")
    parser.add_argument("--sport", default="", help="Sport code (e.g. football)")
    parser.add_argument("--theme", default="", help="Theme code (e.g. injury_prevention)")
    parser.add_argument("--methodology", default="", help="Methodology code")
    parser.add_argument("--content-type", default="", help="Content type code")
    parser.add_argument("--journal", default="", help="Exact journal name")
    parser.add_argument("--year-from", type=int, default=None, help="First publication year")
    parser.add_argument("--year-to", type=int, default=None, help="Last publication year")
    parser.add_argument("--womens", action="store_true", help="Women's sport only")
    parser.add_argument("--full-text", action="store_true", help="Only papers with a PDF")
    parser.add_argument("--open-access", action="store_true", help="Open access only")
    parser.add_argument(
        "--sort",
        default="date",
        choices=list(SORT_LABELS),
        help="Sort order (default: date)",
    )


def paper_state_from_args(args: argparse.Namespace) -> BrowseState:
    """Translate parsed options into the same state the web page builds."""
    params: dict[str, Any] = {
        "q": args.query,
        "paper": args.paper,
        "sport": args.sport,
        "theme": args.theme,
        "methodology": args.methodology,
        "content_type": args.content_type,
        "journal": args.journal,
        "year_from": args.year_from,
        "year_to": args.year_to,
        "is_womens_sport": "1" if args.womens else "",
        "has_full_text": "1" if args.full_text else "",
        "open_access": "1" if args.open_access else "",
        "sort": args.sort,
        "page": getattr(args, "page", 1),
    }
    return from_params(params)


def resource_state_from_args(args: argparse.Namespace) -> BrowseState:
    params = {
        "q": args.query,
        "category": args.category,
        "access": args.access,
        "sports": args.sport,
        "is_on_platform": "1" if args.on_platform else "",
    }
    return from_params(params, facets=RESOURCE_FACETS, flags=RESOURCE_FLAGS, ranges={})


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="livingmeta",
        description="Browse, filter and export the sports-analytics research snapshot",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Project directory holding .metadata/ (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # papers command
    papers_parser = subparsers.add_parser("papers", help="List papers matching filters")
    _add_paper_filters(papers_parser)
    papers_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    papers_parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Rows per page (default: page_size from site.yaml)",
    )

    # export command
    export_parser = subparsers.add_parser("export", help="Export matching papers to CSV or BibTeX")
    _add_paper_filters(export_parser)
    export_parser.add_argument(
        "--format",
        default="csv",
        choices=list(EXPORT_FORMATS),
        dest="fmt",
        help="Export format (default: csv)",
    )
    export_parser.add_argument("--out", type=Path, default=None, help="Output directory")

    # resources command
    resources_parser = subparsers.add_parser("resources", help="List data resources and tools")
    resources_parser.add_argument("-q", "--query", default="", help="Search name and description")
    resources_parser.add_argument("--category", default="", help="dataset, scraper, library, api, tool")
    resources_parser.add_argument("--access", default="", help="free, freemium or paid")
    resources_parser.add_argument("--sport", default="", help="Sport code")
    resources_parser.add_argument("--on-platform", action="store_true", help="Only data we already hold")

    # gaps command
    gaps_parser = subparsers.add_parser("gaps", help="Show research gap analyses")
    gaps_parser.add_argument("slug", nargs="?", default=None, help="Only this analysis")

    # build command
    build_parser = subparsers.add_parser("build", help="Render the static site")
    build_parser.add_argument("--out", type=Path, default=None, help="Output directory (default: site_dir)")

    # snapshot command
    snapshot_parser = subparsers.add_parser("snapshot", help="Export the SQLite database to JSON")
    snapshot_parser.add_argument("--db", type=Path, default=None, help="SQLite database (default: db_path)")
    snapshot_parser.add_argument("--data-dir", type=Path, default=None, help="Output directory (default: data_dir)")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start the web app")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    return parser


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    cli = LivingMetaCLI(Settings.load(args.base_dir))

    try:
        if args.command == "papers":
            cli.cmd_papers(paper_state_from_args(args), args.page_size)
        elif args.command == "export":
            cli.cmd_export(paper_state_from_args(args), args.fmt, args.out)
        elif args.command == "resources":
            cli.cmd_resources(resource_state_from_args(args))
        elif args.command == "gaps":
            cli.cmd_gaps(args.slug)
        elif args.command == "build":
            cli.cmd_build(args.out)
        elif args.command == "snapshot":
            cli.cmd_snapshot(args.db, args.data_dir)
        elif args.command == "serve":
            cli.cmd_serve(args.host, args.port, args.reload)
    except (SnapshotError, FileNotFoundError, ValueError) as e:
        cli.ui.error(str(e))
        return 1
    return 0


def run_cli() -> None:
    sys.exit(main())
