"""Pydantic models for usage analysis."""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from wattwise.models.recommendation import Confidence, WarningAction
from wattwise.models.usage import ParsedUsageData


class UsageAnalysisRequest(BaseModel):
    """Usage feed to analyse.

    Attributes
    ----------
    xml : str
        Green Button XML document
    """

    xml: str = Field(..., min_length=1, description="Green Button XML document")


class ValidationErrorDetail(BaseModel):
    """Blocking validation error."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    error_code: str
    detail: str
    context: dict[str, Any] = Field(default_factory=dict)


class UsageAnalysisResponse(BaseModel):
    """Parsed usage with its validation report.

    Attributes
    ----------
    usage : ParsedUsageData
        Monthly aggregates and quality tier
    is_valid : bool
        Whether the data can support a recommendation
    errors : list[ValidationErrorDetail]
        Blocking problems
    warnings : list[WarningAction]
        Non-blocking warnings with remediation advice
    quality_score : int
        Data quality score, 0-100
    confidence : str
        Confidence level implied by the score
    """

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    usage: ParsedUsageData
    is_valid: bool
    errors: list[ValidationErrorDetail]
    warnings: list[WarningAction]
    quality_score: int = Field(..., ge=0, le=100)
    confidence: Confidence
