"""FastAPI GUI for living-meta.

Thin orchestrator: builds the app, wires per-app state, includes routers.
All route handlers live in ``livingmeta.gui.routers.*``.

Run with ``uvicorn --factory livingmeta.gui.app:create_app``.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from livingmeta import __version__
from livingmeta.config import Settings
from livingmeta.database.repository import SnapshotRepository
from livingmeta.gui.routers import common, content, papers, resources
from livingmeta.gui.state import AppState

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[SnapshotRepository] = None,
) -> FastAPI:
    """Build the web app around an explicit snapshot repository.

    Args:
        settings: Application settings (loaded from ``.metadata/`` if omitted)
        repository: Snapshot repository (built from ``settings.data_dir`` if omitted)
    """
    settings = settings or Settings.load()
    repository = repository or SnapshotRepository(settings.data_dir)

    app = FastAPI(title=settings.site_title, version=__version__)
    app.state.ctx = AppState(settings=settings, repo=repository)
    logger.info("Serving snapshot from %s", repository.data_dir)

    app.include_router(common.router)
    app.include_router(papers.router)
    app.include_router(resources.router)
    app.include_router(content.router)
    return app
