"""Data resource model (datasets, scrapers, libraries, APIs, tools)."""

from dataclasses import dataclass, field
from typing import Any, Optional

from livingmeta.models.fields import opt_int, opt_str, str_list

RESOURCE_CATEGORIES = ("dataset", "scraper", "library", "api", "tool")
ACCESS_TIERS = ("free", "freemium", "paid")


@dataclass(frozen=True)
class OnPlatform:
    """Data we already hold for a resource, with record counts per dataset."""

    summary: str
    record_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total_records(self) -> int:
        return sum(self.record_counts.values())

    @classmethod
    def from_value(cls, value: Any) -> Optional["OnPlatform"]:
        """Accept the old free-text form as well as the structured object."""
        if not value:
            return None
        if isinstance(value, str):
            return cls(summary=value)
        if not isinstance(value, dict):
            return None
        counts: dict[str, int] = {}
        for name, count in (value.get("record_counts") or {}).items():
            number = opt_int(count)
            if number is not None:
                counts[str(name)] = number
        return cls(summary=str(value.get("summary") or ""), record_counts=counts)


@dataclass(frozen=True)
class AccessMethod:
    """How to get at a resource programmatically (scraper, client library)."""

    kind: str
    library: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> Optional["AccessMethod"]:
        if not isinstance(value, dict) or not value.get("kind"):
            return None
        return cls(
            kind=str(value["kind"]),
            library=opt_str(value.get("library")),
            notes=opt_str(value.get("notes")),
        )


@dataclass(frozen=True)
class Resource:
    """A data source, tool or library that papers in the snapshot cite."""

    name: str
    url: str
    category: str
    access: str = "free"
    description: Optional[str] = None
    sports: tuple[str, ...] = ()
    citing_papers: tuple[str, ...] = ()
    on_platform: Optional[OnPlatform] = None
    access_method: Optional[AccessMethod] = None

    @property
    def citation_count(self) -> int:
        return len(self.citing_papers)

    @property
    def is_on_platform(self) -> bool:
        return self.on_platform is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Resource":
        return cls(
            name=str(data.get("name") or ""),
            url=str(data.get("url") or ""),
            category=opt_str(data.get("category")) or "tool",
            access=opt_str(data.get("access")) or "free",
            description=opt_str(data.get("description") or data.get("desc")),
            sports=tuple(str_list(data.get("sports"))),
            citing_papers=tuple(str_list(data.get("citing_papers"))),
            on_platform=OnPlatform.from_value(
                data.get("on_platform") or data.get("onPlatform")
            ),
            access_method=AccessMethod.from_value(data.get("access_method")),
        )
