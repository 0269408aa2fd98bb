"""Paper data model."""

from dataclasses import dataclass
from typing import Any, Optional

from livingmeta.models.fields import flag, opt_float, opt_int, opt_str

OPENALEX_PREFIXES = ("https://openalex.org/", "http://openalex.org/")
DEFAULT_CONTENT_TYPE = "journal_article"


def short_work_id(work_id: str) -> str:
    """Strip the OpenAlex URL prefix: ``https://openalex.org/W1`` → ``W1``."""
    for prefix in OPENALEX_PREFIXES:
        if work_id.startswith(prefix):
            return work_id[len(prefix):]
    return work_id


@dataclass(frozen=True)
class Paper:
    """A classified research paper from the snapshot.

    Every field the pipeline may leave empty is ``Optional``.  Classification
    codes (sport, theme, methodology, content type) are plain strings from a
    fixed vocabulary, see :mod:`livingmeta.models.taxonomy`.
    """

    work_id: str
    title: str
    pub_date: Optional[str] = None
    pub_year: Optional[int] = None
    journal: Optional[str] = None
    cited_by_count: int = 0
    abstract: Optional[str] = None
    open_access: bool = False
    doi: Optional[str] = None

    # Classification
    sport: str = "other"
    theme: str = "other"
    sub_theme: Optional[str] = None
    methodology: str = "other"
    data_type: Optional[str] = None
    content_type: str = DEFAULT_CONTENT_TYPE
    is_womens_sport: bool = False
    ai_summary: Optional[str] = None
    source_url: Optional[str] = None
    source_platform: Optional[str] = None

    # Impact metrics (OpenAlex)
    fwci: Optional[float] = None
    citation_percentile: Optional[float] = None
    is_top_10_percent: bool = False
    citations_per_year: Optional[float] = None
    primary_topic: Optional[str] = None

    # Journal / first author metrics
    journal_h_index: Optional[int] = None
    journal_if_proxy: Optional[float] = None
    first_author_name: Optional[str] = None
    first_author_h_index: Optional[int] = None

    # Full text (PDF manifest)
    pdf_url: Optional[str] = None

    @property
    def short_id(self) -> str:
        return short_work_id(self.work_id)

    @property
    def has_full_text(self) -> bool:
        return self.pdf_url is not None

    @property
    def openalex_url(self) -> str:
        return f"https://openalex.org/works/{self.short_id}"

    @property
    def summary(self) -> Optional[str]:
        """Abstract when present, otherwise the AI summary."""
        return self.abstract or self.ai_summary

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Paper":
        """Build a Paper from one snapshot row (JSON object or SQLite row)."""
        pub_date = opt_str(data.get("pub_date"))
        pub_year = opt_int(data.get("pub_year"))
        if pub_year is None and pub_date and pub_date[:4].isdigit():
            pub_year = int(pub_date[:4])

        return cls(
            work_id=str(data.get("work_id") or ""),
            title=str(data.get("title") or "(no title)"),
            pub_date=pub_date,
            pub_year=pub_year,
            journal=opt_str(data.get("journal")),
            cited_by_count=opt_int(data.get("cited_by_count")) or 0,
            abstract=opt_str(data.get("abstract")),
            open_access=flag(data.get("open_access")),
            doi=opt_str(data.get("doi")),
            sport=opt_str(data.get("sport")) or "other",
            theme=opt_str(data.get("theme")) or "other",
            sub_theme=opt_str(data.get("sub_theme")),
            methodology=opt_str(data.get("methodology")) or "other",
            data_type=opt_str(data.get("data_type")),
            content_type=opt_str(data.get("content_type")) or DEFAULT_CONTENT_TYPE,
            is_womens_sport=flag(data.get("is_womens_sport")),
            ai_summary=opt_str(data.get("ai_summary")),
            source_url=opt_str(data.get("source_url")),
            source_platform=opt_str(data.get("source_platform")),
            fwci=opt_float(data.get("fwci")),
            citation_percentile=opt_float(data.get("citation_percentile")),
            is_top_10_percent=flag(data.get("is_top_10_percent")),
            citations_per_year=opt_float(data.get("citations_per_year")),
            primary_topic=opt_str(data.get("primary_topic")),
            journal_h_index=opt_int(data.get("journal_h_index")),
            journal_if_proxy=opt_float(data.get("journal_if_proxy")),
            first_author_name=opt_str(data.get("first_author_name")),
            first_author_h_index=opt_int(data.get("first_author_h_index")),
            pdf_url=opt_str(data.get("pdf_url")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Snapshot representation (flags back to 0/1 like the pipeline)."""
        return {
            "work_id": self.work_id,
            "title": self.title,
            "pub_date": self.pub_date,
            "pub_year": self.pub_year,
            "journal": self.journal,
            "cited_by_count": self.cited_by_count,
            "abstract": self.abstract,
            "open_access": int(self.open_access),
            "doi": self.doi,
            "sport": self.sport,
            "theme": self.theme,
            "sub_theme": self.sub_theme,
            "methodology": self.methodology,
            "data_type": self.data_type,
            "content_type": self.content_type,
            "is_womens_sport": int(self.is_womens_sport),
            "ai_summary": self.ai_summary,
            "source_url": self.source_url,
            "source_platform": self.source_platform,
            "fwci": self.fwci,
            "citation_percentile": self.citation_percentile,
            "is_top_10_percent": int(self.is_top_10_percent),
            "citations_per_year": self.citations_per_year,
            "primary_topic": self.primary_topic,
            "journal_h_index": self.journal_h_index,
            "journal_if_proxy": self.journal_if_proxy,
            "first_author_name": self.first_author_name,
            "first_author_h_index": self.first_author_h_index,
        }


@dataclass(frozen=True)
class PaperIndexEntry:
    """Just enough of a paper to render an inline citation."""

    work_id: str
    title: str
    author: Optional[str] = None
    year: Optional[int] = None

    @classmethod
    def from_paper(cls, paper: Paper) -> "PaperIndexEntry":
        return cls(
            work_id=paper.short_id,
            title=paper.title,
            author=paper.first_author_name,
            year=paper.pub_year,
        )

    @classmethod
    def from_dict(cls, work_id: str, data: dict[str, Any]) -> "PaperIndexEntry":
        return cls(
            work_id=short_work_id(work_id),
            title=str(data.get("title") or ""),
            author=opt_str(data.get("author") or data.get("first_author_name")),
            year=opt_int(data.get("year") or data.get("pub_year")),
        )
