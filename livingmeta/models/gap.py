"""Gap analysis report model.

Every free-text field may embed paper reference tokens (``W<digits>``);
they are resolved at render time by
:func:`livingmeta.services.reference_service.link_references`.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from livingmeta.models.fields import opt_float, opt_int, opt_str, str_list


@dataclass(frozen=True)
class Gap:
    title: str
    gap_type: str
    description: str
    importance: Optional[str] = None
    feasibility: Optional[str] = None
    confidence: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Gap":
        return cls(
            title=str(data.get("title") or ""),
            gap_type=opt_str(data.get("type") or data.get("gap_type")) or "other",
            description=str(data.get("description") or ""),
            importance=opt_str(data.get("importance")),
            feasibility=opt_str(data.get("feasibility")),
            confidence=opt_float(data.get("confidence")),
        )


@dataclass(frozen=True)
class AgendaItem:
    priority: int
    action: str
    rationale: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], position: int) -> "AgendaItem":
        return cls(
            priority=opt_int(data.get("priority")) or position,
            action=str(data.get("action") or ""),
            rationale=opt_str(data.get("rationale")),
        )


@dataclass(frozen=True)
class Reflection:
    strengths: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()
    assumptions: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "Reflection":
        if not isinstance(data, dict):
            data = {}
        return cls(
            strengths=tuple(str_list(data.get("strengths"))),
            limitations=tuple(str_list(data.get("limitations"))),
            assumptions=tuple(str_list(data.get("assumptions"))),
        )


@dataclass(frozen=True)
class GapAnalysis:
    """One research question, its literature landscape and open gaps."""

    slug: str
    question: str
    landscape_summary: str = ""
    gaps: tuple[Gap, ...] = ()
    agenda: tuple[AgendaItem, ...] = ()
    reflection: Reflection = field(default_factory=Reflection)
    papers_reviewed: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GapAnalysis":
        raw_agenda = [a for a in data.get("agenda") or [] if isinstance(a, dict)]
        agenda = [AgendaItem.from_dict(a, i) for i, a in enumerate(raw_agenda, 1)]
        agenda.sort(key=lambda item: item.priority)
        return cls(
            slug=str(data.get("slug") or ""),
            question=str(data.get("question") or ""),
            landscape_summary=str(data.get("landscape_summary") or ""),
            gaps=tuple(
                Gap.from_dict(g) for g in data.get("gaps") or [] if isinstance(g, dict)
            ),
            agenda=tuple(agenda),
            reflection=Reflection.from_dict(data.get("reflection")),
            papers_reviewed=opt_int(data.get("papers_reviewed")),
            created_at=opt_str(data.get("created_at")),
        )
