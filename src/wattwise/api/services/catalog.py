"""Plan catalog snapshot loading."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from wattwise.models.catalog import CatalogSnapshot

logger = logging.getLogger(__name__)


def load_catalog(path: str | Path) -> CatalogSnapshot:
    """Load a catalog snapshot from a JSON file.

    The file holds either ``{"plans": [...], "suppliers": [...]}`` or a bare
    list of plans. Without a ``fetchedAt`` key the file's modification time
    is used.

    Parameters
    ----------
    path : str | Path
        Path to the JSON file

    Returns
    -------
    CatalogSnapshot
        Parsed snapshot

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    pydantic.ValidationError
        If a plan or supplier entry is invalid
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"plans": data}

    if "fetchedAt" not in data and "fetched_at" not in data:
        data["fetchedAt"] = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    snapshot = CatalogSnapshot.model_validate(data)
    logger.info(
        f"Loaded catalog from {path}: {len(snapshot.plans)} plans, "
        f"{len(snapshot.suppliers)} suppliers"
    )
    return snapshot


def load_catalog_or_empty(path: str | Path | None) -> CatalogSnapshot:
    """Load the configured catalog, or an empty snapshot if unavailable."""
    if not path:
        logger.warning("No catalog path configured; requests must supply plans")
        return CatalogSnapshot()

    try:
        return load_catalog(path)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load catalog from {path}: {e}")
        return CatalogSnapshot()
