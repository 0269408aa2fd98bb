"""Aggregate statistics over the papers snapshot."""

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Optional

from livingmeta.models.paper import Paper

TOP_JOURNALS = 15


@dataclass
class Stats:
    """Headline numbers and distributions shown on the home and trends pages.

    Distributions are ``(code, count)`` pairs sorted by count, descending;
    ``yearly_papers`` is sorted by year.
    """

    total_papers: int = 0
    papers_with_abstract: int = 0
    journal_count: int = 0
    womens_sport_count: int = 0
    open_access_count: int = 0
    full_text_count: int = 0
    total_authors: Optional[int] = None
    oldest_paper: Optional[str] = None
    newest_paper: Optional[str] = None
    top_journals: list[tuple[str, int]] = field(default_factory=list)
    yearly_papers: list[tuple[int, int]] = field(default_factory=list)
    sport_distribution: list[tuple[str, int]] = field(default_factory=list)
    theme_distribution: list[tuple[str, int]] = field(default_factory=list)
    methodology_distribution: list[tuple[str, int]] = field(default_factory=list)
    content_type_distribution: list[tuple[str, int]] = field(default_factory=list)
    data_type_distribution: list[tuple[str, int]] = field(default_factory=list)
    exported_at: Optional[str] = None

    @property
    def abstract_percentage(self) -> float:
        if not self.total_papers:
            return 0.0
        return round(100 * self.papers_with_abstract / self.total_papers, 1)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["abstract_percentage"] = self.abstract_percentage
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stats":
        """Inverse of :meth:`to_dict`; unknown keys are ignored."""

        def pairs(key: str) -> list[tuple[Any, int]]:
            return [
                (item[0], int(item[1]))
                for item in data.get(key) or []
                if isinstance(item, (list, tuple)) and len(item) == 2
            ]

        return cls(
            total_papers=int(data.get("total_papers") or 0),
            papers_with_abstract=int(data.get("papers_with_abstract") or 0),
            journal_count=int(data.get("journal_count") or 0),
            womens_sport_count=int(data.get("womens_sport_count") or 0),
            open_access_count=int(data.get("open_access_count") or 0),
            full_text_count=int(data.get("full_text_count") or 0),
            total_authors=data.get("total_authors"),
            oldest_paper=data.get("oldest_paper"),
            newest_paper=data.get("newest_paper"),
            top_journals=pairs("top_journals"),
            yearly_papers=[(int(y), c) for y, c in pairs("yearly_papers")],
            sport_distribution=pairs("sport_distribution"),
            theme_distribution=pairs("theme_distribution"),
            methodology_distribution=pairs("methodology_distribution"),
            content_type_distribution=pairs("content_type_distribution"),
            data_type_distribution=pairs("data_type_distribution"),
            exported_at=data.get("exported_at"),
        )


def _distribution(values: Iterable[Optional[str]]) -> list[tuple[str, int]]:
    counts = Counter(v for v in values if v)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def compute_stats(papers: list[Paper], exported_at: Optional[str] = None) -> Stats:
    """Compute :class:`Stats` for *papers*."""
    dates = sorted(p.pub_date for p in papers if p.pub_date)
    journals = _distribution(p.journal for p in papers)
    years = Counter(p.pub_year for p in papers if p.pub_year and p.pub_year > 0)

    return Stats(
        total_papers=len(papers),
        papers_with_abstract=sum(1 for p in papers if p.abstract),
        journal_count=len(journals),
        womens_sport_count=sum(1 for p in papers if p.is_womens_sport),
        open_access_count=sum(1 for p in papers if p.open_access),
        full_text_count=sum(1 for p in papers if p.has_full_text),
        oldest_paper=dates[0] if dates else None,
        newest_paper=dates[-1] if dates else None,
        top_journals=journals[:TOP_JOURNALS],
        yearly_papers=sorted(years.items()),
        sport_distribution=_distribution(p.sport for p in papers),
        theme_distribution=_distribution(p.theme for p in papers),
        methodology_distribution=_distribution(p.methodology for p in papers),
        content_type_distribution=_distribution(p.content_type for p in papers),
        data_type_distribution=_distribution(p.data_type for p in papers),
        exported_at=exported_at,
    )
