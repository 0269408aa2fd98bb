"""Service layer."""

from livingmeta.services.browse_state import BrowseState, from_params, reduce, select
from livingmeta.services.export_service import PaperExporter, escape_csv, to_bibtex, to_csv
from livingmeta.services.pagination import Page, clamp_page, paginate
from livingmeta.services.reference_service import (
    extract_surname,
    format_author_ap,
    link_references,
    parse_references,
)
from livingmeta.services.search_service import (
    FilterConfig,
    facet_counts,
    filter_records,
    sort_records,
)
from livingmeta.services.stats_service import Stats, compute_stats

__all__ = [
    "BrowseState",
    "FilterConfig",
    "Page",
    "PaperExporter",
    "Stats",
    "clamp_page",
    "compute_stats",
    "escape_csv",
    "extract_surname",
    "facet_counts",
    "filter_records",
    "format_author_ap",
    "from_params",
    "link_references",
    "paginate",
    "parse_references",
    "reduce",
    "select",
    "sort_records",
    "to_bibtex",
    "to_csv",
]
