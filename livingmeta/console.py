"""Console UI for terminal output using Rich."""

from pathlib import Path
from typing import Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from livingmeta.models.gap import GapAnalysis
from livingmeta.models.paper import Paper, PaperIndexEntry
from livingmeta.models.resource import Resource
from livingmeta.models.taxonomy import label
from livingmeta.services.pagination import Page
from livingmeta.services.reference_service import format_author_ap, plain_references


class ConsoleUI:
    """Rich-based console UI for paper display and notifications."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def info(self, message: str) -> None:
        self._console.print(message)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        self._console.print(f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Print an error message in red."""
        self._console.print(f"[red]Error:[/red] {message}")

    def display_papers(self, page: Page[Paper], total_papers: int) -> None:
        """Display one page of papers in a table.

        Args:
            page: Current page of the filtered list
            total_papers: Size of the whole snapshot (for the caption)
        """
        table = Table(
            title=f"Papers ({page.total} of {total_papers})",
            caption=(
                f"Page {page.page + 1}/{max(page.total_pages, 1)}"
                + (f", showing {page.first_index}-{page.last_index}" if page.items else "")
            ),
        )
        table.add_column("ID", no_wrap=True)
        table.add_column("Date", width=10)
        table.add_column("Author", overflow="fold")
        table.add_column("Title", overflow="fold")
        table.add_column("Sport / Theme", overflow="fold")
        table.add_column("Cites", justify="right")

        for paper in page.items:
            table.add_row(
                paper.short_id,
                (paper.pub_date or str(paper.pub_year or ""))[:10] or "-",
                format_author_ap(paper.first_author_name) or "-",
                paper.title,
                f"{label('sport', paper.sport)} / {label('theme', paper.theme)}",
                str(paper.cited_by_count),
            )

        if page.items:
            self._console.print(table)
        else:
            self._console.print("No papers match these filters.")

    def display_resources(self, resources: list[Resource]) -> None:
        """Display resources sorted by category, then name."""
        table = Table(title=f"Resources ({len(resources)})")
        table.add_column("Name", overflow="fold")
        table.add_column("Category")
        table.add_column("Access")
        table.add_column("Sports", overflow="fold")
        table.add_column("Cited by", justify="right")
        table.add_column("URL", overflow="fold")

        for resource in sorted(resources, key=lambda r: (r.category, r.name.lower())):
            name = resource.name
            if resource.is_on_platform:
                name = f"{name} [green]●[/green]"
            table.add_row(
                name,
                label("category", resource.category),
                label("access", resource.access),
                ", ".join(label("sports", s) for s in resource.sports) or "-",
                str(resource.citation_count),
                resource.url,
            )

        if resources:
            self._console.print(table)
        else:
            self._console.print("No resources found.")

    def display_gap_analyses(
        self,
        analyses: list[GapAnalysis],
        index: Mapping[str, PaperIndexEntry],
    ) -> None:
        """Display each analysis with its gaps; references render as ``Surname (Year)``."""
        if not analyses:
            self._console.print("No gap analyses found.")
            return

        for analysis in analyses:
            self._console.rule(f"[bold]{escape(analysis.question)}[/bold]")
            if analysis.landscape_summary:
                self._console.print(
                    plain_references(analysis.landscape_summary, index), markup=False
                )

            table = Table(title=f"Gaps ({len(analysis.gaps)})")
            table.add_column("Gap", overflow="fold")
            table.add_column("Type")
            table.add_column("Importance")
            table.add_column("Description", overflow="fold")
            for gap in analysis.gaps:
                table.add_row(
                    Text(gap.title),
                    gap.gap_type.replace("_", " "),
                    gap.importance or "-",
                    Text(plain_references(gap.description, index)),
                )
            self._console.print(table)

            for item in analysis.agenda:
                self._console.print(f"  {item.priority}. {item.action}", markup=False)

    def exported(self, count: int, filepath: Path) -> None:
        """Print export success message."""
        self._console.print(f"[green]Exported[/green] {count} papers → {filepath}")

    def no_papers_to_export(self) -> None:
        self._console.print("[yellow]No papers match these filters; nothing exported.[/yellow]")

    def snapshot_written(self, counts: Mapping[str, int], data_dir: Path) -> None:
        self._console.print(
            f"[green]Snapshot written[/green]: {counts.get('papers', 0)} papers, "
            f"{counts.get('journals', 0)} journals → {data_dir}"
        )

    def built(self, file_count: int, out_dir: Path) -> None:
        """Print static site build summary."""
        self._console.print(
            f"\n[green]Done.[/green] Wrote [bold]{file_count}[/bold] files to {out_dir}"
        )
