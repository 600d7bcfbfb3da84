"""Catalog snapshot routes."""

from fastapi import APIRouter

from wattwise.api.dependencies import AppSettings, CurrentCatalog
from wattwise.api.models.catalog import CatalogSummaryResponse

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("", response_model=CatalogSummaryResponse)
async def get_catalog_summary(catalog: CurrentCatalog, settings: AppSettings) -> CatalogSummaryResponse:
    """Summarise the catalog snapshot used for recommendations."""
    return CatalogSummaryResponse(
        plan_count=len(catalog.plans),
        supplier_count=len(catalog.suppliers),
        fetched_at=catalog.fetched_at,
        stale=catalog.is_stale(settings.CATALOG_TTL),
    )
