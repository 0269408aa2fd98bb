import json
from pathlib import Path

import pytest

from livingmeta.database.repository import SnapshotDatabase, SnapshotError, SnapshotRepository


def test_papers_load_with_flags_and_pdf_manifest(repo: SnapshotRepository) -> None:
    papers = repo.papers()
    assert [p.short_id for p in papers] == ["W3000000003", "W2000000002", "W1000000001"]
    by_id = {p.short_id: p for p in papers}
    lane = by_id["W1000000001"]
    assert lane.open_access is True
    assert lane.pdf_url == "https://example.org/lane.pdf"
    assert lane.has_full_text
    assert not by_id["W2000000002"].has_full_text


def test_files_are_read_once(repo: SnapshotRepository, snapshot_dir: Path) -> None:
    first = repo.papers()
    (snapshot_dir / "classified-papers.json").write_text("[]", encoding="utf-8")
    assert repo.papers() is first


def test_missing_files_give_empty_collections(tmp_path: Path) -> None:
    repo = SnapshotRepository(tmp_path / "nowhere")
    assert repo.papers() == []
    assert repo.resources() == []
    assert repo.blog_posts() == []
    assert repo.paper_index() == {}
    assert repo.stats().total_papers == 0


def test_malformed_json_raises_snapshot_error(snapshot_dir: Path) -> None:
    (snapshot_dir / "resources.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError, match="resources.json"):
        SnapshotRepository(snapshot_dir).resources()


def test_non_utf8_snapshot_raises_snapshot_error(snapshot_dir: Path) -> None:
    (snapshot_dir / "resources.json").write_bytes(b'[{"name": "\xff\xfe"}]')
    with pytest.raises(SnapshotError, match="resources.json"):
        SnapshotRepository(snapshot_dir).resources()


def test_wrong_shape_raises_snapshot_error(snapshot_dir: Path) -> None:
    (snapshot_dir / "classified-papers.json").write_text('{"a": 1}', encoding="utf-8")
    with pytest.raises(SnapshotError):
        SnapshotRepository(snapshot_dir).papers()


def test_resources_and_content(repo: SnapshotRepository) -> None:
    resources = {r.name: r for r in repo.resources()}
    assert resources["StatsBomb Open Data"].on_platform.total_records == 1230
    assert resources["nba_api"].access_method.library == "nba_api"
    assert resources["Opta"].sports == ("football", "rugby")

    posts = repo.blog_posts()
    assert [p.slug for p in posts] == ["lane-advantage", "older-post"]
    assert repo.find_blog_post("missing") is None

    analysis = repo.find_gap_analysis("lane-advantage")
    assert [a.priority for a in analysis.agenda] == [1, 2]
    assert analysis.reflection.limitations == ("Small n",)


def test_paper_index_merges_exported_index(snapshot_dir: Path) -> None:
    (snapshot_dir / "paper-index.json").write_text(
        json.dumps({"W5555555555": {"title": "Outside", "author": "Ann Lee", "year": 2019}}),
        encoding="utf-8",
    )
    index = SnapshotRepository(snapshot_dir).paper_index()
    assert index["W5555555555"].author == "Ann Lee"
    assert index["W1000000001"].year == 2012


def test_journals_fall_back_to_papers(repo: SnapshotRepository) -> None:
    assert repo.journals() == ["European Journal of Sport Science", "Journal of Sports Sciences"]


def test_stats_computed_when_not_exported(repo: SnapshotRepository) -> None:
    stats = repo.stats()
    assert stats.total_papers == 3
    assert stats.full_text_count == 1


def test_database_reads_relevant_papers(pipeline_db: Path) -> None:
    db = SnapshotDatabase(pipeline_db)
    papers = db.fetch_classified_papers()
    assert [p.title for p in papers] == ["Relevant"]
    assert papers[0].journal == "J One"
    assert papers[0].is_womens_sport is True
    assert papers[0].content_type == "journal_article"
    assert db.count("authors") == 3
    with pytest.raises(ValueError):
        db.count("authors; DROP TABLE papers")


def test_database_must_exist(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        SnapshotDatabase(tmp_path / "missing.db")
