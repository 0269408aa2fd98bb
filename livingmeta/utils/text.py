"""Text helpers for DOIs and snapshot abstracts."""

import re
from typing import Optional

from bs4 import BeautifulSoup

# DOI regex pattern: 10.XXXX/... format
DOI_RE = re.compile(r"\b10\.\d{4,9}/[-._;()/:A-Z0-9]+\b", re.IGNORECASE)

DOI_URL_PREFIXES = (
    "https://doi.org/",
    "http://doi.org/",
    "https://dx.doi.org/",
    "http://dx.doi.org/",
)


def strip_doi_prefix(doi: str) -> str:
    """Remove a resolver URL prefix, keeping the DOI's case."""
    doi = doi.strip()
    for prefix in DOI_URL_PREFIXES:
        if doi.startswith(prefix):
            return doi[len(prefix):]
    return doi


def doi_url(doi: Optional[str]) -> Optional[str]:
    """Resolver link for *doi*, or None when there is no usable DOI."""
    if not doi:
        return None
    match = DOI_RE.search(doi)
    if not match:
        return None
    return f"https://doi.org/{match.group(0)}"


def clean_abstract(text: Optional[str]) -> str:
    """Clean abstract text for display.

    1. Drop MathML blocks and remaining HTML tags (JATS markup from OpenAlex).
    2. Strip a leading "Abstract" / "ABSTRACT" label.
    3. Normalise whitespace.
    """
    if not text:
        return ""

    if "<" in text:
        soup = BeautifulSoup(text, "html.parser")
        for math_tag in soup.find_all(["math", "mml:math"]):
            math_tag.decompose()
        text = soup.get_text(" ")

    text = re.sub(r"^\s*abstract\b[\s.:;—–-]*", "", text, flags=re.IGNORECASE)
    return " ".join(text.split())


def truncate(text: Optional[str], limit: int = 300) -> str:
    """Cut *text* at a word boundary near *limit* characters."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"
