"""Export the pipeline's SQLite database to the JSON snapshot files.

Run before building or deploying the site whenever the pipeline has
produced new data; the web app itself only reads the JSON files.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from livingmeta.database.repository import (
    JOURNALS_FILE,
    PAPERS_FILE,
    STATS_FILE,
    SnapshotDatabase,
)
from livingmeta.services.stats_service import compute_stats

logger = logging.getLogger(__name__)


def _write_json(path: Path, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")


def export_snapshot(db: SnapshotDatabase, data_dir: Path) -> dict[str, int]:
    """Write papers, journals and stats JSON from *db* into *data_dir*.

    Returns:
        Dict with 'papers' and 'journals' counts
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    papers = db.fetch_classified_papers()
    logger.info("Read %d classified papers from %s", len(papers), db.db_path)

    journals = sorted({p.journal for p in papers if p.journal})
    stats = compute_stats(papers, exported_at=datetime.now(timezone.utc).isoformat())
    try:
        stats.total_authors = db.count("authors")
    except ValueError:
        logger.debug("No authors table in %s", db.db_path)

    _write_json(data_dir / PAPERS_FILE, [p.to_dict() for p in papers])
    _write_json(data_dir / JOURNALS_FILE, journals)
    _write_json(data_dir / STATS_FILE, stats.to_dict())

    logger.info("Wrote snapshot to %s", data_dir)
    return {"papers": len(papers), "journals": len(journals)}
