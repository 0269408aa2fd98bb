import json
import sqlite3
from pathlib import Path

import pytest

from livingmeta.config import Settings
from livingmeta.database.repository import SnapshotRepository
from livingmeta.models.paper import Paper

PAPERS = [
    {
        "work_id": "https://openalex.org/W3000000003",
        "title": "Altitude Effects",
        "pub_date": "2021-05-10",
        "pub_year": 2021,
        "journal": "Journal of Sports Sciences",
        "cited_by_count": 4,
        "abstract": "<jats:p>Abstract Training at altitude changes pacing.</jats:p>",
        "open_access": 1,
        "doi": "https://doi.org/10.1000/alt.2021",
        "sport": "athletics",
        "theme": "performance_analysis",
        "methodology": "statistical",
        "is_womens_sport": 0,
        "fwci": 1.5,
        "first_author_name": "Maria García-López",
    },
    {
        "work_id": "https://openalex.org/W2000000002",
        "title": "Pacing Strategy",
        "pub_date": "2020-03-01",
        "pub_year": 2020,
        "journal": "European Journal of Sport Science",
        "cited_by_count": 30,
        "abstract": None,
        "ai_summary": "Even pacing wins, in cycling.",
        "open_access": 0,
        "doi": None,
        "sport": "cycling",
        "theme": "performance_analysis",
        "methodology": "machine_learning",
        "is_womens_sport": 1,
        "fwci": None,
        "first_author_name": "John Smith",
    },
    {
        "work_id": "https://openalex.org/W1000000001",
        "title": "Inner Lane Advantage",
        "pub_date": "2012-09-15",
        "pub_year": 2012,
        "journal": "Journal of Sports Sciences",
        "cited_by_count": 12,
        "abstract": "Inner lanes in speed skating {1000m} races.",
        "open_access": 1,
        "doi": "10.1000/lane.2012",
        "sport": "speed_skating",
        "theme": "tactical_analysis",
        "methodology": "statistical",
        "is_womens_sport": 0,
        "fwci": 0.8,
        "first_author_name": "Jan de Vries",
    },
]

RESOURCES = [
    {
        "name": "StatsBomb Open Data",
        "url": "https://github.com/statsbomb/open-data",
        "category": "dataset",
        "access": "free",
        "sports": ["football"],
        "description": "Event data for selected competitions.",
        "citing_papers": ["W1000000001"],
        "on_platform": {"summary": "Events loaded", "record_counts": {"events": 1200, "matches": 30}},
    },
    {
        "name": "nba_api",
        "url": "https://github.com/swar/nba_api",
        "category": "library",
        "access": "free",
        "sports": ["basketball"],
        "description": "Client for stats.nba.com.",
        "access_method": {"kind": "python", "library": "nba_api"},
    },
    {
        "name": "Opta",
        "url": "https://www.statsperform.com/opta/",
        "category": "dataset",
        "access": "paid",
        "sports": ["football", "rugby"],
        "description": "Commercial event data.",
    },
]

GAP_ANALYSES = [
    {
        "slug": "lane-advantage",
        "question": "Is there an inner lane advantage in 1000m speed skating?",
        "landscape_summary": "Early work (W1000000001) found an advantage; W9999999999 is unknown.",
        "gaps": [
            {"title": "Women's races", "gap_type": "population", "importance": "high",
             "description": "Only men's races studied, see https://openalex.org/W1000000001."},
        ],
        "agenda": [
            {"priority": 2, "action": "Replicate with 2020 data", "rationale": "Newer ice"},
            {"priority": 1, "action": "Collect women's results", "rationale": "Gap"},
        ],
        "reflection": {"strengths": ["Clear design"], "limitations": ["Small n"], "assumptions": []},
        "papers_reviewed": 12,
        "created_at": "2026-02-11T10:00:00Z",
    }
]

BLOG_POSTS = [
    {
        "slug": "older-post",
        "title": "Older post",
        "date": "2025-12-01",
        "body": [{"type": "paragraph", "text": "Nothing to cite."}],
    },
    {
        "slug": "lane-advantage",
        "title": "Does the inner lane win?",
        "subtitle": "A first look",
        "date": "2026-02-11",
        "author": "Editorial",
        "tags": ["speed skating"],
        "related_gap_slug": "lane-advantage",
        "reading_time_min": 4,
        "body": [
            {"type": "heading", "text": "Background"},
            {"type": "paragraph", "text": "As W1000000001 showed, the inner lane matters."},
            {"type": "list", "items": ["First point", "Second point"]},
        ],
    },
]

FEED_ITEMS = [
    {
        "title": "New pacing paper",
        "url": "https://example.org/pacing",
        "source_name": "Journal of Sports Sciences",
        "content_type": "journal_article",
        "sport": "cycling",
        "pub_date": "2026-02-10T08:00:00Z",
    },
    {
        "title": "Blog on xG",
        "url": "https://example.org/xg",
        "source_name": "Analytics Blog",
        "content_type": "blog_post",
        "sport": "football",
        "pub_date": "2025-01-01",
    },
]


def write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    write_json(data_dir / "classified-papers.json", PAPERS)
    write_json(data_dir / "resources.json", RESOURCES)
    write_json(data_dir / "gap-analyses.json", GAP_ANALYSES)
    write_json(data_dir / "blog-posts.json", BLOG_POSTS)
    write_json(data_dir / "feed-items.json", FEED_ITEMS)
    write_json(
        data_dir / "paper-pdfs.json",
        {"papers": [{"work_id": "W1000000001", "pdf_url": "https://example.org/lane.pdf"}]},
    )
    return data_dir


@pytest.fixture
def repo(snapshot_dir: Path) -> SnapshotRepository:
    return SnapshotRepository(snapshot_dir)


@pytest.fixture
def settings(tmp_path: Path, snapshot_dir: Path) -> Settings:
    return Settings(
        base_dir=tmp_path,
        data_dir=snapshot_dir,
        export_dir=tmp_path / "exports",
        site_dir=tmp_path / "site",
        metadata_dir=tmp_path / ".metadata",
        page_size=2,
    )


@pytest.fixture
def papers() -> list[Paper]:
    return [Paper.from_dict(row) for row in PAPERS]


PIPELINE_SCHEMA = """
CREATE TABLE papers (
    work_id TEXT PRIMARY KEY, title TEXT, pub_date TEXT, pub_year INTEGER,
    journal_name TEXT, cited_by_count INTEGER, abstract TEXT, open_access INTEGER,
    doi TEXT, source_url TEXT, source_platform TEXT, fwci REAL,
    citation_percentile REAL, is_top_10_percent INTEGER, citations_per_year REAL,
    primary_topic TEXT, first_author_name TEXT, first_author_h_index INTEGER,
    journal_h_index INTEGER, journal_if_proxy REAL
);
CREATE TABLE classifications (
    work_id TEXT, is_relevant INTEGER, sport TEXT, methodology TEXT, theme TEXT,
    sub_theme TEXT, is_womens_sport INTEGER, data_type TEXT, ai_summary TEXT,
    content_type TEXT
);
CREATE TABLE authors (id INTEGER PRIMARY KEY, name TEXT);
INSERT INTO papers (work_id, title, pub_date, pub_year, journal_name, cited_by_count, open_access)
    VALUES ('https://openalex.org/W1', 'Relevant', '2024-01-02', 2024, 'J One', 5, 1),
           ('https://openalex.org/W2', 'Irrelevant', '2024-02-02', 2024, 'J Two', 0, 0);
INSERT INTO classifications (work_id, is_relevant, sport, methodology, theme, is_womens_sport)
    VALUES ('https://openalex.org/W1', 1, 'tennis', 'statistical', 'betting_markets', 1),
           ('https://openalex.org/W2', 0, 'other', 'other', 'other', 0);
INSERT INTO authors (name) VALUES ('A'), ('B'), ('C');
"""


@pytest.fixture
def pipeline_db(tmp_path: Path) -> Path:
    """A minimal pipeline database: one relevant and one irrelevant paper."""
    db_path = tmp_path / "living_meta.db"
    conn = sqlite3.connect(db_path)
    conn.executescript(PIPELINE_SCHEMA)
    conn.commit()
    conn.close()
    return db_path
