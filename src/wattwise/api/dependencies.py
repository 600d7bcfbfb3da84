"""FastAPI dependencies for settings and catalog injection."""

from typing import Annotated

from fastapi import Depends, Request

from wattwise.api.config import Settings, get_settings
from wattwise.models.catalog import CatalogSnapshot


def get_catalog(request: Request) -> CatalogSnapshot:
    """Catalog snapshot held by the application.

    Parameters
    ----------
    request : Request
        Incoming request

    Returns
    -------
    CatalogSnapshot
        Snapshot loaded at startup, or an empty one
    """
    return getattr(request.app.state, "catalog", None) or CatalogSnapshot()


AppSettings = Annotated[Settings, Depends(get_settings)]
CurrentCatalog = Annotated[CatalogSnapshot, Depends(get_catalog)]
