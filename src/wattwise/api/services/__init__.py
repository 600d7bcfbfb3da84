"""API-side services."""

__all__ = ["load_catalog", "load_catalog_or_empty"]

from wattwise.api.services.catalog import load_catalog, load_catalog_or_empty
