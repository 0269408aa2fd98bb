"""living-meta - browse a sports-analytics research snapshot.

Reads the JSON/SQLite snapshots written by the classification pipeline
and serves them as a web app, a static site and a terminal CLI.
"""

__version__ = "1.0.0"

from livingmeta.config import Settings
from livingmeta.models.paper import Paper

__all__ = ["Paper", "Settings", "__version__"]
