import pytest

from livingmeta.models.paper import Paper
from livingmeta.services.browse_state import (
    RESOURCE_FACETS,
    RESOURCE_FLAGS,
    BrowseState,
    Reset,
    SetFacet,
    SetPage,
    SetPaperId,
    SetQuery,
    SetRange,
    SetSort,
    ToggleFlag,
    from_params,
    reduce,
    select,
)


def test_reduce_returns_new_state() -> None:
    state = BrowseState()
    new = reduce(state, SetQuery("  lane "))
    assert new.query == "lane"
    assert state.query == ""


@pytest.mark.parametrize(
    "action",
    [
        SetQuery("x"),
        SetPaperId("W1"),
        SetFacet("sport", "tennis"),
        ToggleFlag("open_access"),
        SetRange("pub_year", 2010, None),
        SetSort("citations"),
    ],
)
def test_filter_changes_reset_page(action) -> None:
    state = reduce(BrowseState(), SetPage(3))
    assert reduce(state, action).page == 0


def test_set_page_never_negative() -> None:
    assert reduce(BrowseState(), SetPage(-4)).page == 0


def test_facet_set_and_clear() -> None:
    state = reduce(BrowseState(), SetFacet("sport", "tennis"))
    assert state.facets == {"sport": "tennis"}
    assert reduce(state, SetFacet("sport", "")).facets == {}


def test_toggle_flag_twice() -> None:
    state = reduce(BrowseState(), ToggleFlag("open_access"))
    assert state.flags == {"open_access": True}
    assert reduce(state, ToggleFlag("open_access")).flags == {}


def test_unknown_sort_falls_back_to_date() -> None:
    assert reduce(BrowseState(), SetSort("bogus")).sort == "date"


def test_reset() -> None:
    state = reduce(reduce(BrowseState(), SetQuery("x")), SetPage(2))
    assert reduce(state, Reset()) == BrowseState()


def test_active_filter_count() -> None:
    state = BrowseState()
    for action in (SetQuery("x"), SetFacet("sport", "tennis"), SetRange("pub_year", 2010), SetSort("fwci")):
        state = reduce(state, action)
    assert state.active_filter_count == 4


def test_params_round_trip() -> None:
    params = {
        "q": "lane",
        "sport": "speed_skating",
        "open_access": "1",
        "year_from": "2010",
        "year_to": "2020",
        "sort": "citations",
        "page": "3",
    }
    state = from_params(params)
    assert state.query == "lane"
    assert state.facets == {"sport": "speed_skating"}
    assert state.flags == {"open_access": True}
    assert state.ranges == {"pub_year": (2010.0, 2020.0)}
    assert state.sort == "citations"
    assert state.page == 2
    assert state.to_params() == params


def test_from_params_ignores_junk() -> None:
    state = from_params({"sport": "all", "year_from": "abc", "page": "x", "search": "pace"})
    assert state.facets == {}
    assert state.ranges == {}
    assert state.page == 0
    assert state.query == "pace"


def test_resource_params() -> None:
    state = from_params(
        {"category": "dataset", "is_on_platform": "true"},
        facets=RESOURCE_FACETS,
        flags=RESOURCE_FLAGS,
        ranges={},
    )
    assert state.facets == {"category": "dataset"}
    assert state.flags == {"is_on_platform": True}


def test_select_filters_and_sorts(papers: list[Paper]) -> None:
    state = reduce(BrowseState(), SetFacet("journal", "Journal of Sports Sciences"))
    assert [p.title for p in select(papers, state)] == ["Altitude Effects", "Inner Lane Advantage"]
    state = reduce(state, SetSort("citations"))
    assert [p.title for p in select(papers, state)] == ["Inner Lane Advantage", "Altitude Effects"]


def test_paper_id_takes_priority(papers: list[Paper]) -> None:
    state = reduce(reduce(BrowseState(), SetQuery("altitude")), SetPaperId("W1000000001"))
    assert [p.title for p in select(papers, state)] == ["Inner Lane Advantage"]


def test_unknown_paper_id_falls_back_to_search(papers: list[Paper]) -> None:
    state = reduce(reduce(BrowseState(), SetQuery("altitude")), SetPaperId("W404404"))
    assert [p.title for p in select(papers, state)] == ["Altitude Effects"]
