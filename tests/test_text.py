from livingmeta.utils.text import clean_abstract, doi_url, strip_doi_prefix, truncate


def test_clean_abstract_strips_markup_and_label() -> None:
    raw = "<jats:p>ABSTRACT: Speed <mml:math><mml:mi>v</mml:mi></mml:math> matters.</jats:p>"
    assert clean_abstract(raw) == "Speed matters."


def test_clean_abstract_keeps_words_starting_with_abstract() -> None:
    assert clean_abstract("Abstraction layers  help.") == "Abstraction layers help."
    assert clean_abstract(None) == ""


def test_doi_helpers() -> None:
    assert strip_doi_prefix("https://doi.org/10.1080/ABC") == "10.1080/ABC"
    assert doi_url("doi: 10.1080/abc.2020") == "https://doi.org/10.1080/abc.2020"
    assert doi_url("not-a-doi") is None
    assert doi_url(None) is None


def test_truncate() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("one two three four", 9) == "one two…"
