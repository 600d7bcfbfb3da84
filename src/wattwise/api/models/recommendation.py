"""Pydantic models for recommendation requests and responses."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from wattwise.models.plan import Plan, Supplier
from wattwise.models.preferences import ContractTerms, CurrentPlanData, UserPreferences
from wattwise.models.recommendation import Recommendation, WarningAction
from wattwise.models.usage import DataQuality


class RecommendationRequest(BaseModel):
    """Inputs for a recommendation run.

    Attributes
    ----------
    usage_xml : str
        Green Button XML document
    current_plan : CurrentPlanData
        Customer's current plan
    preferences : UserPreferences
        Cost and renewable priorities (must sum to 100)
    contract_terms : ContractTerms | None
        Switching terms for scenario analysis
    plans : list[Plan] | None
        Catalog to compare against; the server snapshot when omitted
    suppliers : list[Supplier] | None
        Supplier ratings; the server snapshot's when omitted
    """

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "json_schema_extra": {
            "example": {
                "usageXml": "<feed>...</feed>",
                "currentPlan": {"supplier": "Reliant Energy", "rate": 14.5},
                "preferences": {"costPriority": 70, "renewablePriority": 30},
                "contractTerms": {"earlyTerminationFee": 150, "contractEndDate": "12/2026"},
            }
        },
    }

    usage_xml: str = Field(..., min_length=1)
    current_plan: CurrentPlanData
    preferences: UserPreferences
    contract_terms: ContractTerms | None = None
    plans: list[Plan] | None = None
    suppliers: list[Supplier] | None = None


class RecommendationResponse(BaseModel):
    """Ranked recommendations with data quality context."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    recommendations: list[Recommendation]
    data_quality: DataQuality
    quality_score: int = Field(..., ge=0, le=100)
    warnings: list[WarningAction]
