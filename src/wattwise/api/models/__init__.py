"""Pydantic models for API request/response validation."""

__all__ = [
    "UsageAnalysisRequest",
    "UsageAnalysisResponse",
    "RecommendationRequest",
    "RecommendationResponse",
    "CatalogSummaryResponse",
]

from wattwise.api.models.catalog import CatalogSummaryResponse
from wattwise.api.models.recommendation import RecommendationRequest, RecommendationResponse
from wattwise.api.models.usage import UsageAnalysisRequest, UsageAnalysisResponse
