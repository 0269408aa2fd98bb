"""Entry point for running living-meta as a module or installed script.

Usage:
    livingmeta / python -m livingmeta         → web app (uvicorn)
    livingmeta <command> ... / python -m livingmeta <command> ... → CLI
"""

import sys

import uvicorn


def run() -> None:
    """Entry point: no args → web app (via uvicorn), else → CLI."""
    if len(sys.argv) == 1:
        uvicorn.run(
            "livingmeta.gui.app:create_app",
            factory=True,
            host="127.0.0.1",
            port=8000,
            reload=True,
        )
    else:
        from livingmeta.cli import run_cli
        run_cli()


if __name__ == "__main__":
    run()
