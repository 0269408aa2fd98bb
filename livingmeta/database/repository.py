"""Read-only access to the pipeline's snapshot (JSON files and SQLite)."""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TypeVar

from livingmeta.models.content import BlogPost, FeedItem
from livingmeta.models.gap import GapAnalysis
from livingmeta.models.paper import Paper, PaperIndexEntry, short_work_id
from livingmeta.models.resource import Resource
from livingmeta.services.stats_service import Stats, compute_stats

logger = logging.getLogger(__name__)

T = TypeVar("T")

PAPERS_FILE = "classified-papers.json"
PDF_MANIFEST_FILE = "paper-pdfs.json"
PAPER_INDEX_FILE = "paper-index.json"
RESOURCES_FILE = "resources.json"
FEED_ITEMS_FILE = "feed-items.json"
BLOG_POSTS_FILE = "blog-posts.json"
GAP_ANALYSES_FILE = "gap-analyses.json"
JOURNALS_FILE = "journals.json"
STATS_FILE = "stats.json"


class SnapshotError(Exception):
    """A snapshot file exists but cannot be parsed into the expected shape."""


class SnapshotRepository:
    """Repository over the static JSON snapshot in *data_dir*.

    Each file is read at most once per repository instance.  Construct one
    repository per snapshot and pass it to whatever needs it; tests build
    their own over a fixture directory.
    """

    def __init__(self, data_dir: Path):
        """Initialize repository with the snapshot directory.

        Args:
            data_dir: Directory containing the exported JSON files
        """
        self.data_dir = Path(data_dir)
        self._cache: dict[str, Any] = {}

    # ── Collections ───────────────────────────────────────────────────

    def papers(self) -> list[Paper]:
        """All classified papers, in snapshot order (newest first)."""
        return self._cached("papers", self._load_papers)

    def resources(self) -> list[Resource]:
        return self._cached(
            "resources", lambda: self._load_list(RESOURCES_FILE, Resource.from_dict)
        )

    def feed_items(self) -> list[FeedItem]:
        return self._cached(
            "feed_items", lambda: self._load_list(FEED_ITEMS_FILE, FeedItem.from_dict)
        )

    def blog_posts(self) -> list[BlogPost]:
        """Blog posts sorted by date, newest first."""
        def load() -> list[BlogPost]:
            posts = self._load_list(BLOG_POSTS_FILE, BlogPost.from_dict)
            return sorted(posts, key=lambda p: p.date, reverse=True)

        return self._cached("blog_posts", load)

    def gap_analyses(self) -> list[GapAnalysis]:
        return self._cached(
            "gap_analyses",
            lambda: self._load_list(GAP_ANALYSES_FILE, GapAnalysis.from_dict),
        )

    # ── Lookups ───────────────────────────────────────────────────────

    def find_blog_post(self, slug: str) -> Optional[BlogPost]:
        return next((p for p in self.blog_posts() if p.slug == slug), None)

    def find_gap_analysis(self, slug: str) -> Optional[GapAnalysis]:
        return next((g for g in self.gap_analyses() if g.slug == slug), None)

    def paper_index(self) -> dict[str, PaperIndexEntry]:
        """Short work id → citation data, for inline reference rendering.

        Uses ``paper-index.json`` when the pipeline exported one (it covers
        papers outside the classified set); entries from the papers snapshot
        fill in the rest.
        """
        return self._cached("paper_index", self._load_paper_index)

    def journals(self) -> list[str]:
        """Distinct journal names, sorted."""
        def load() -> list[str]:
            raw = self._read_json(JOURNALS_FILE)
            if isinstance(raw, list):
                return sorted({str(j) for j in raw if j})
            return sorted({p.journal for p in self.papers() if p.journal})

        return self._cached("journals", load)

    def stats(self) -> Stats:
        """Exported ``stats.json`` when present, otherwise computed from papers."""
        def load() -> Stats:
            raw = self._read_json(STATS_FILE)
            if isinstance(raw, dict):
                return Stats.from_dict(raw)
            return compute_stats(self.papers())

        return self._cached("stats", load)

    # ── Private ───────────────────────────────────────────────────────

    def _cached(self, key: str, loader: Callable[[], T]) -> T:
        if key not in self._cache:
            self._cache[key] = loader()
        return self._cache[key]

    def _read_json(self, filename: str) -> Any:
        """Return parsed JSON, or None when the file does not exist."""
        path = self.data_dir / filename
        if not path.exists():
            logger.warning("Snapshot file missing: %s", path)
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SnapshotError(f"{path}: invalid JSON ({e})") from e

    def _load_list(self, filename: str, factory: Callable[[dict[str, Any]], T]) -> list[T]:
        raw = self._read_json(filename)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise SnapshotError(f"{self.data_dir / filename}: expected a JSON array")
        return [factory(row) for row in raw if isinstance(row, dict)]

    def _load_papers(self) -> list[Paper]:
        rows = self._read_json(PAPERS_FILE)
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise SnapshotError(f"{self.data_dir / PAPERS_FILE}: expected a JSON array")

        pdf_urls = self._load_pdf_manifest()
        papers = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            if pdf_urls and not row.get("pdf_url"):
                pdf_url = pdf_urls.get(short_work_id(str(row.get("work_id") or "")))
                if pdf_url:
                    row = {**row, "pdf_url": pdf_url}
            papers.append(Paper.from_dict(row))
        return papers

    def _load_pdf_manifest(self) -> dict[str, str]:
        """``{"papers": [{"work_id", "pdf_url"}]}`` → short id → PDF url."""
        path = self.data_dir / PDF_MANIFEST_FILE
        if not path.exists():
            return {}
        raw = self._read_json(PDF_MANIFEST_FILE)
        entries = raw.get("papers") if isinstance(raw, dict) else None
        pdf_urls: dict[str, str] = {}
        for entry in entries or []:
            if isinstance(entry, dict) and entry.get("work_id") and entry.get("pdf_url"):
                pdf_urls[short_work_id(str(entry["work_id"]))] = str(entry["pdf_url"])
        return pdf_urls

    def _load_paper_index(self) -> dict[str, PaperIndexEntry]:
        index: dict[str, PaperIndexEntry] = {}
        path = self.data_dir / PAPER_INDEX_FILE
        if path.exists():
            raw = self._read_json(PAPER_INDEX_FILE)
            if not isinstance(raw, dict):
                raise SnapshotError(f"{path}: expected a JSON object")
            for work_id, data in raw.items():
                if isinstance(data, dict):
                    entry = PaperIndexEntry.from_dict(work_id, data)
                    index[entry.work_id] = entry
        for paper in self.papers():
            index.setdefault(paper.short_id, PaperIndexEntry.from_paper(paper))
        return index


class SnapshotDatabase:
    """Read-only queries against the pipeline's SQLite database.

    Only used to produce the JSON snapshot; the web app never opens the
    database.  The connection is opened in ``mode=ro`` per query.
    """

    PAPER_QUERY = """
        SELECT p.work_id, p.title, p.pub_date, p.pub_year,
               p.journal_name AS journal, p.cited_by_count, p.abstract,
               p.open_access, p.doi,
               c.sport, c.methodology, c.theme, c.sub_theme,
               c.is_womens_sport, c.data_type, c.ai_summary, c.content_type,
               p.source_url, p.source_platform,
               p.fwci, p.citation_percentile, p.is_top_10_percent,
               p.citations_per_year, p.primary_topic,
               p.first_author_name, p.first_author_h_index,
               p.journal_h_index, p.journal_if_proxy
        FROM papers p
        JOIN classifications c ON c.work_id = p.work_id
        WHERE c.is_relevant = 1
        ORDER BY p.pub_date DESC
    """

    def __init__(self, db_path: Path):
        """Initialize with database path.

        Args:
            db_path: Path to the pipeline's SQLite database file
        """
        self.db_path = Path(db_path)
        if not self.db_path.exists():
            raise FileNotFoundError(f"Database not found: {self.db_path}")

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for read-only database connections."""
        conn = sqlite3.connect(f"file:{self.db_path.as_posix()}?mode=ro", uri=True)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def fetch_classified_papers(self) -> list[Paper]:
        """Relevant classified papers joined with their metrics, newest first."""
        with self._connection() as conn:
            rows = conn.execute(self.PAPER_QUERY).fetchall()
        return [Paper.from_dict(dict(row)) for row in rows]

    def count(self, table: str) -> int:
        """Row count of *table* (name checked against the schema first)."""
        with self._connection() as conn:
            known = {
                row["name"]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                )
            }
            if table not in known:
                raise ValueError(f"Unknown table: {table}")
            return conn.execute(f"SELECT COUNT(*) AS cnt FROM {table}").fetchone()["cnt"]
