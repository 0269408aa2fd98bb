"""Configuration management.

``Settings`` is a plain dataclass: every call to ``Settings.load()`` builds
a fresh instance from disk, and the caller passes it on to whatever needs
it (repository, web app, site builder).  Use ``update()`` to change values
at runtime.

All user-editable configuration lives under ``.metadata/``:

* ``site.yaml`` – snapshot location, output directories, page size

On first run, missing files are copied from ``.metadata.example/``.
"""

import logging
import os
import shutil
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "LIVINGMETA_DATA_DIR"
DEFAULT_PAGE_SIZE = 25


@dataclass
class Settings:
    """Application settings with runtime-mutable paths.

    Usage::

        settings = Settings.load()                 # read .metadata/site.yaml
        settings.update(data_dir=Path("fixtures"))  # runtime change
    """

    base_dir: Path = Path(".")
    site_title: str = "Sports Analytics Living Meta-Analysis"
    data_dir: Path = Path("data")
    db_path: Path = Path("living_meta.db")
    export_dir: Path = Path("exports")
    site_dir: Path = Path("site")
    metadata_dir: Path = Path(".metadata")
    page_size: int = DEFAULT_PAGE_SIZE

    # ── Runtime helpers ───────────────────────────────────────────────

    def update(self, **kwargs: Any) -> None:
        """Mutate settings fields at runtime.

        >>> Settings().update(page_size=50)
        """
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Settings has no field '{key}'")
            setattr(self, key, value)

    # ── Factory ───────────────────────────────────────────────────────

    @classmethod
    def load(cls, base_dir: Optional[Path] = None) -> "Settings":
        """Build Settings from ``<base_dir>/.metadata/site.yaml``.

        *base_dir* defaults to the current working directory.  Relative
        paths in the YAML file are resolved against *base_dir*.  The
        ``LIVINGMETA_DATA_DIR`` environment variable overrides ``data_dir``.
        """
        if base_dir is None:
            base_dir = Path.cwd()
        base_dir = Path(base_dir)

        metadata_dir = base_dir / ".metadata"
        cls._ensure_default_files(base_dir, metadata_dir)

        raw = _load_site_yaml(metadata_dir / "site.yaml")
        known = {f.name for f in fields(cls)}
        for key in list(raw):
            if key not in known:
                logger.warning("Ignoring unknown setting '%s' in site.yaml", key)
                raw.pop(key)

        settings = cls(
            base_dir=base_dir,
            site_title=str(raw.get("site_title") or cls.site_title),
            data_dir=_resolve(base_dir, raw.get("data_dir"), "data"),
            db_path=_resolve(base_dir, raw.get("db_path"), "living_meta.db"),
            export_dir=_resolve(base_dir, raw.get("export_dir"), "exports"),
            site_dir=_resolve(base_dir, raw.get("site_dir"), "site"),
            metadata_dir=metadata_dir,
            page_size=_positive_int(raw.get("page_size"), DEFAULT_PAGE_SIZE),
        )

        env_data_dir = os.environ.get(DATA_DIR_ENV)
        if env_data_dir:
            settings.data_dir = Path(env_data_dir)
        return settings

    # ── Private ───────────────────────────────────────────────────────

    @staticmethod
    def _ensure_default_files(base_dir: Path, metadata_dir: Path) -> None:
        """Copy ``.metadata.example/`` templates when real files are missing."""
        example_dir = base_dir / ".metadata.example"
        if not example_dir.exists():
            return

        metadata_dir.mkdir(parents=True, exist_ok=True)
        for example_file in example_dir.iterdir():
            if example_file.is_file():
                target = metadata_dir / example_file.name
                if not target.exists():
                    shutil.copy2(example_file, target)
                    logger.info("Created .metadata/%s from template", example_file.name)


# ---------------------------------------------------------------------------
# YAML loaders
# ---------------------------------------------------------------------------

def _load_site_yaml(path: Path) -> dict[str, Any]:
    """Load ``site.yaml``; an unreadable file falls back to defaults."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s, using defaults: %s", path, e)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def _resolve(base_dir: Path, value: Any, default: str) -> Path:
    path = Path(str(value)) if value else Path(default)
    return path if path.is_absolute() else base_dir / path


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default
