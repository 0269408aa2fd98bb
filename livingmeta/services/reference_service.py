"""Inline paper references in free text, and author name formatting.

Gap analyses and blog posts cite papers by OpenAlex work id
(``W2741809807`` or ``https://openalex.org/W2741809807``).  These helpers
split such text into plain and reference segments and render each
reference as ``Surname (Year)`` against a paper index.
"""

import re
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from markupsafe import Markup, escape

from livingmeta.models.paper import PaperIndexEntry

# Bare work id, or one behind an OpenAlex URL, optionally in square brackets
# (the brackets belong to the token).  Not part of a longer word.
REFERENCE_RE = re.compile(
    r"(\[)?(?<![A-Za-z0-9/])(?:https?://openalex\.org/(?:works/)?)?"
    r"(W\d{4,})(?![A-Za-z0-9])(?(1)\])"
)

SURNAME_PARTICLES = frozenset(
    {"de", "van", "von", "el", "al", "del", "da", "di", "le", "la", "dos", "das"}
)

PAPER_LINK = "/papers?paper={id}"


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class ReferenceSegment:
    """A reference token; ``entry`` is None when the id is not in the index."""

    raw: str
    work_id: str
    entry: Optional[PaperIndexEntry] = None

    @property
    def resolved(self) -> bool:
        return self.entry is not None

    @property
    def label(self) -> str:
        if self.entry is None:
            return f"[{self.work_id}]"
        return citation_label(self.entry)


Segment = Union[TextSegment, ReferenceSegment]


# ---------------------------------------------------------------------------
# Author names
# ---------------------------------------------------------------------------

def _split_name(full_name: str) -> tuple[list[str], list[str]]:
    """Split into (given names, surname parts).

    A particle from ``SURNAME_PARTICLES`` after the first token and before
    the last one starts the surname; otherwise the surname is the last
    token.  This is a heuristic and is wrong for some naming cultures.
    """
    parts = full_name.split()
    if len(parts) <= 1:
        return [], parts
    surname_start = len(parts) - 1
    for i in range(1, len(parts) - 1):
        if parts[i].lower() in SURNAME_PARTICLES:
            surname_start = i
            break
    return parts[:surname_start], parts[surname_start:]


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def extract_surname(full_name: str) -> str:
    """``"Jan de Vries"`` → ``"De Vries"``, ``"John Smith"`` → ``"Smith"``."""
    given, surname = _split_name(full_name.strip())
    if not given:
        return " ".join(surname)
    return _capitalize_first(" ".join(surname))


def format_author_ap(full_name: Optional[str]) -> str:
    """AP style author: ``"Jan de Vries"`` → ``"De Vries, J."``."""
    if not full_name or not full_name.strip():
        return ""
    given, surname = _split_name(full_name.strip())
    if not given:
        return " ".join(surname)
    initials = "".join(name[0].upper() + "." for name in given)
    return f"{_capitalize_first(' '.join(surname))}, {initials}"


def citation_label(entry: PaperIndexEntry) -> str:
    """``"Surname (Year)"``; falls back to the title's first words."""
    if entry.author and entry.author.strip():
        who = extract_surname(entry.author)
    else:
        words = entry.title.split()
        who = " ".join(words[:4]) + ("…" if len(words) > 4 else "")
        who = who or entry.work_id
    year = entry.year if entry.year else "n.d."
    return f"{who} ({year})"


# ---------------------------------------------------------------------------
# Parsing and rendering
# ---------------------------------------------------------------------------

def parse_references(
    text: Optional[str],
    index: Mapping[str, PaperIndexEntry],
) -> list[Segment]:
    """Split *text* into text and reference segments, in order.

    Unmatched text is kept verbatim, so joining the raw segments gives back
    the input.  Unknown ids produce unresolved segments, never errors.
    """
    if not text:
        return []
    segments: list[Segment] = []
    position = 0
    for match in REFERENCE_RE.finditer(text):
        if match.start() > position:
            segments.append(TextSegment(text[position:match.start()]))
        work_id = match.group(2)
        segments.append(
            ReferenceSegment(raw=match.group(0), work_id=work_id, entry=index.get(work_id))
        )
        position = match.end()
    if position < len(text):
        segments.append(TextSegment(text[position:]))
    return segments


def has_references(text: Optional[str]) -> bool:
    return bool(text) and REFERENCE_RE.search(text) is not None


def link_references(
    text: Optional[str],
    index: Mapping[str, PaperIndexEntry],
    link: str = PAPER_LINK,
) -> Union[str, Markup]:
    """Render *text* as HTML with references turned into citation links.

    Resolved references become ``<a class="ref">Surname (Year)</a>`` linking
    to *link* (``{id}`` is replaced by the short work id); unresolved ones
    become a bracketed ``<span class="ref-missing">`` placeholder.  Text
    without any reference is returned unchanged.
    """
    if not text or not has_references(text):
        return text or ""

    html_parts: list[str] = []
    for segment in parse_references(text, index):
        if isinstance(segment, TextSegment):
            html_parts.append(str(escape(segment.text)))
        elif segment.entry is not None:
            html_parts.append(
                '<a class="ref" href="{href}" title="{title}">{label}</a>'.format(
                    href=escape(link.format(id=segment.work_id)),
                    title=escape(segment.entry.title),
                    label=escape(segment.label),
                )
            )
        else:
            html_parts.append(
                '<span class="ref-missing" title="Paper not in database">{label}</span>'.format(
                    label=escape(segment.label)
                )
            )
    return Markup("".join(html_parts))


def plain_references(text: Optional[str], index: Mapping[str, PaperIndexEntry]) -> str:
    """Like :func:`link_references` but for the terminal: labels, no markup."""
    if not text or not has_references(text):
        return text or ""
    return "".join(
        s.text if isinstance(s, TextSegment) else s.label
        for s in parse_references(text, index)
    )
