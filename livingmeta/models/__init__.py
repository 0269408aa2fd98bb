"""Typed snapshot records."""

from livingmeta.models.content import BlogPost, BodyBlock, FeedItem
from livingmeta.models.gap import AgendaItem, Gap, GapAnalysis, Reflection
from livingmeta.models.paper import Paper, PaperIndexEntry, short_work_id
from livingmeta.models.resource import AccessMethod, OnPlatform, Resource

__all__ = [
    "AccessMethod",
    "AgendaItem",
    "BlogPost",
    "BodyBlock",
    "FeedItem",
    "Gap",
    "GapAnalysis",
    "OnPlatform",
    "Paper",
    "PaperIndexEntry",
    "Reflection",
    "Resource",
    "short_work_id",
]
