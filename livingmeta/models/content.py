"""Content models: sources feed items and blog posts."""

from dataclasses import dataclass, field
from typing import Any, Optional

from livingmeta.models.fields import opt_int, opt_str, str_list


@dataclass(frozen=True)
class FeedItem:
    """One entry of the "what's new" feed (journals, blogs, preprints)."""

    title: str
    url: str
    source_name: Optional[str] = None
    content_type: str = "journal_article"
    sport: str = "other"
    pub_date: Optional[str] = None
    created_at: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedItem":
        return cls(
            title=str(data.get("title") or "(no title)"),
            url=str(data.get("url") or data.get("source_url") or ""),
            source_name=opt_str(data.get("source_name")),
            content_type=opt_str(data.get("content_type")) or "journal_article",
            sport=opt_str(data.get("sport")) or "other",
            pub_date=opt_str(data.get("pub_date")),
            created_at=opt_str(data.get("created_at")),
            summary=opt_str(data.get("summary") or data.get("ai_summary")),
        )


@dataclass(frozen=True)
class BodyBlock:
    """A block of blog body: paragraph/heading text or a bullet list."""

    type: str
    text: Optional[str] = None
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class BlogPost:
    slug: str
    title: str
    date: str
    subtitle: Optional[str] = None
    author: Optional[str] = None
    tags: tuple[str, ...] = ()
    related_gap_slug: Optional[str] = None
    image_emoji: Optional[str] = None
    reading_time_min: Optional[int] = None
    body: tuple[BodyBlock, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BlogPost":
        blocks = []
        for raw in data.get("body") or []:
            if not isinstance(raw, dict):
                continue
            blocks.append(
                BodyBlock(
                    type=str(raw.get("type") or "paragraph"),
                    text=opt_str(raw.get("text")),
                    items=tuple(str_list(raw.get("items"))),
                )
            )
        return cls(
            slug=str(data.get("slug") or ""),
            title=str(data.get("title") or ""),
            date=str(data.get("date") or ""),
            subtitle=opt_str(data.get("subtitle")),
            author=opt_str(data.get("author")),
            tags=tuple(str_list(data.get("tags"))),
            related_gap_slug=opt_str(data.get("related_gap_slug")),
            image_emoji=opt_str(data.get("image_emoji")),
            reading_time_min=opt_int(data.get("reading_time_min")),
            body=tuple(blocks),
        )
