from markupsafe import Markup

from livingmeta.models.paper import PaperIndexEntry
from livingmeta.services.reference_service import (
    ReferenceSegment,
    TextSegment,
    citation_label,
    extract_surname,
    format_author_ap,
    link_references,
    parse_references,
    plain_references,
)

INDEX = {
    "W1000000001": PaperIndexEntry("W1000000001", "Inner Lane Advantage", "Jan de Vries", 2012),
    "W2000000002": PaperIndexEntry("W2000000002", "Pacing Strategy", None, None),
}


def test_surname_rule() -> None:
    assert extract_surname("Jan de Vries") == "De Vries"
    assert extract_surname("John Smith") == "Smith"
    assert extract_surname("Maria García-López") == "García-López"
    assert extract_surname("Ronaldo") == "Ronaldo"
    assert extract_surname("Ludwig van der Berg") == "Van der Berg"


def test_particle_in_last_position_is_the_surname() -> None:
    assert extract_surname("Anna La") == "La"


def test_author_ap_style() -> None:
    assert format_author_ap("Jan de Vries") == "De Vries, J."
    assert format_author_ap("Mary Ann Smith") == "Smith, M.A."
    assert format_author_ap(None) == ""


def test_citation_label_fallbacks() -> None:
    assert citation_label(INDEX["W1000000001"]) == "De Vries (2012)"
    assert citation_label(INDEX["W2000000002"]) == "Pacing Strategy (n.d.)"


def test_text_without_references_is_unchanged() -> None:
    text = "No citations here, only W12 and words like W1234abc."
    result = link_references(text, INDEX)
    assert result == text
    assert not isinstance(result, Markup)


def test_single_resolved_reference() -> None:
    text = "Earlier work (W1000000001) found an effect."
    segments = parse_references(text, INDEX)
    assert segments == [
        TextSegment("Earlier work ("),
        ReferenceSegment("W1000000001", "W1000000001", INDEX["W1000000001"]),
        TextSegment(") found an effect."),
    ]
    html = link_references(text, INDEX)
    assert html.count("<a ") == 1
    assert '<a class="ref" href="/papers?paper=W1000000001"' in html
    assert ">De Vries (2012)</a>" in html
    assert html.startswith("Earlier work (")
    assert html.endswith(") found an effect.")


def test_openalex_url_is_recognized() -> None:
    segments = parse_references("See https://openalex.org/W1000000001.", INDEX)
    assert isinstance(segments[1], ReferenceSegment)
    assert segments[1].raw == "https://openalex.org/W1000000001"
    assert segments[2] == TextSegment(".")


def test_unresolved_reference_is_placeholder_not_link() -> None:
    html = link_references("Unknown W9999999999 cited.", INDEX)
    assert "<a " not in html
    assert '<span class="ref-missing"' in html
    assert "[W9999999999]" in html


def test_surrounding_text_is_escaped() -> None:
    html = link_references("<b>bold</b> W1000000001", INDEX)
    assert "&lt;b&gt;bold&lt;/b&gt;" in html


def test_custom_link_template() -> None:
    html = link_references("W1000000001", INDEX, link="https://openalex.org/works/{id}")
    assert 'href="https://openalex.org/works/W1000000001"' in html


def test_plain_references() -> None:
    text = "See W1000000001 and W9999999999."
    assert plain_references(text, INDEX) == "See De Vries (2012) and [W9999999999]."


def test_bracketed_tokens_keep_no_extra_brackets() -> None:
    text = "see [W1000000001] and [W9999999999]"
    assert plain_references(text, INDEX) == "see De Vries (2012) and [W9999999999]"
    segments = parse_references(text, INDEX)
    assert segments[1] == ReferenceSegment("[W1000000001]", "W1000000001", INDEX["W1000000001"])
    html = link_references(text, INDEX)
    assert "[<a" not in html
    assert "[[" not in html


def test_unclosed_bracket_stays_in_text() -> None:
    segments = parse_references("see [W1000000001 here", INDEX)
    assert segments[0] == TextSegment("see [")
    assert segments[1].raw == "W1000000001"
