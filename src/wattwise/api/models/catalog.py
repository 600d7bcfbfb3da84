"""Pydantic models for catalog information."""

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CatalogSummaryResponse(BaseModel):
    """Summary of the server's catalog snapshot.

    Attributes
    ----------
    plan_count : int
        Number of plans
    supplier_count : int
        Number of rated suppliers
    fetched_at : datetime
        When the snapshot was taken
    stale : bool
        Whether the snapshot is older than the configured TTL
    """

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    plan_count: int
    supplier_count: int
    fetched_at: datetime
    stale: bool
