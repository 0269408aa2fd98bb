"""CSV and BibTeX export of the current (filtered) paper list."""

import logging
import re
from pathlib import Path
from typing import Any, Iterable

from livingmeta.models.paper import Paper, short_work_id
from livingmeta.utils.text import strip_doi_prefix

logger = logging.getLogger(__name__)

EXPORT_BASENAME = "sports-analytics-papers"

CSV_COLUMNS = [
    "title",
    "first_author",
    "doi",
    "year",
    "journal",
    "journal_if_proxy",
    "sport",
    "theme",
    "methodology",
    "is_womens_sport",
    "data_type",
    "cited_by_count",
    "citations_per_year",
    "fwci",
    "citation_percentile",
    "is_top_10_percent",
    "first_author_h_index",
    "ai_summary",
]

EXPORT_FORMATS = {
    "csv": ("csv", "text/csv; charset=utf-8"),
    "bib": ("bib", "application/x-bibtex"),
}

_BIBTEX_KEY_RE = re.compile(r"[^A-Za-z0-9_-]")


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_csv(value: Any) -> str:
    """Render one CSV field.

    ``None`` becomes an empty string.  A value containing a comma, a double
    quote or a newline is wrapped in double quotes, and every inner quote is
    doubled.
    """
    text = _format_value(value)
    if "," in text or '"' in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _csv_row(paper: Paper) -> list[Any]:
    return [
        paper.title,
        paper.first_author_name,
        paper.doi,
        paper.pub_year,
        paper.journal,
        paper.journal_if_proxy,
        paper.sport,
        paper.theme,
        paper.methodology,
        paper.is_womens_sport,
        paper.data_type,
        paper.cited_by_count,
        paper.citations_per_year,
        paper.fwci,
        paper.citation_percentile,
        paper.is_top_10_percent,
        paper.first_author_h_index,
        paper.ai_summary,
    ]


def to_csv(papers: Iterable[Paper]) -> str:
    """Header row plus one row per paper, in the given order."""
    lines = [",".join(CSV_COLUMNS)]
    for paper in papers:
        lines.append(",".join(escape_csv(v) for v in _csv_row(paper)))
    return "\n".join(lines)


def bibtex_key(work_id: str) -> str:
    """Citation key from the work id: OpenAlex prefix and odd characters dropped."""
    key = _BIBTEX_KEY_RE.sub("", short_work_id(work_id or ""))
    return key or "unknown"


def _strip_braces(text: str | None) -> str:
    return (text or "").replace("{", "").replace("}", "")


def to_bibtex_entry(paper: Paper) -> str:
    year = paper.pub_year if paper.pub_year is not None else ""
    return (
        f"@article{{{bibtex_key(paper.work_id)},\n"
        f"  title = {{{_strip_braces(paper.title)}}},\n"
        f"  journal = {{{_strip_braces(paper.journal)}}},\n"
        f"  year = {{{year}}},\n"
        f"  doi = {{{strip_doi_prefix(paper.doi or '')}}},\n"
        f"}}"
    )


def to_bibtex(papers: Iterable[Paper]) -> str:
    """BibTeX entries for every paper with a DOI; others are skipped."""
    entries = [to_bibtex_entry(p) for p in papers if p.doi]
    return "\n\n".join(entries) + "\n"


def render_export(papers: Iterable[Paper], fmt: str) -> str:
    """Serialize *papers* as ``csv`` or ``bib``."""
    if fmt == "csv":
        return to_csv(papers)
    if fmt == "bib":
        return to_bibtex(papers)
    raise ValueError(f"Unknown export format: {fmt!r} (expected 'csv' or 'bib')")


def export_filename(fmt: str) -> str:
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt!r} (expected 'csv' or 'bib')")
    return f"{EXPORT_BASENAME}.{EXPORT_FORMATS[fmt][0]}"


class PaperExporter:
    """Service for writing paper exports to disk."""

    def __init__(self, export_dir: Path):
        """Initialize exporter.

        Args:
            export_dir: Directory to save exported files
        """
        self.export_dir = Path(export_dir)

    def export(self, papers: list[Paper], fmt: str = "csv") -> Path:
        """Write *papers* as ``sports-analytics-papers.<csv|bib>``.

        Args:
            papers: Papers to export, in output order
            fmt: 'csv' or 'bib'

        Returns:
            Path to the written file (overwritten if it exists)
        """
        content = render_export(papers, fmt)
        self.export_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.export_dir / export_filename(fmt)
        with open(filepath, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info("Exported %d papers to %s", len(papers), filepath)
        return filepath
