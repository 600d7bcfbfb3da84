"""Plan recommendation routes."""

import logging

from fastapi import APIRouter

from wattwise.api.dependencies import AppSettings, CurrentCatalog
from wattwise.api.models.recommendation import RecommendationRequest, RecommendationResponse
from wattwise.services.parser import parse_green_button_xml
from wattwise.services.recommender import generate_recommendations, resolve_contract_terms
from wattwise.services.validation import (
    calculate_data_quality_score,
    get_warning_actions,
    validate_usage_data,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.post("", response_model=RecommendationResponse)
async def create_recommendations(
    request: RecommendationRequest,
    catalog: CurrentCatalog,
    settings: AppSettings,
) -> RecommendationResponse:
    """Recommend up to three plans for the supplied usage feed.

    Parameters
    ----------
    request : RecommendationRequest
        Usage feed, current plan, preferences and optional catalog override
    catalog : CatalogSnapshot
        Server catalog snapshot
    settings : Settings
        Application settings

    Returns
    -------
    RecommendationResponse
        Recommendations with data quality score and warnings

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/recommendations" \\
         -H "Content-Type: application/json" -d @request.json
    ```
    """
    usage = parse_green_button_xml(request.usage_xml)
    validation = validate_usage_data(usage)
    validation.raise_for_errors()

    plans = request.plans if request.plans is not None else catalog.plans
    suppliers = request.suppliers if request.suppliers is not None else catalog.suppliers
    if request.plans is None and catalog.is_stale(settings.CATALOG_TTL):
        logger.warning(f"Serving recommendations from stale catalog ({catalog.fetched_at})")

    contract_terms = resolve_contract_terms(
        request.current_plan, request.contract_terms, settings.DEFAULT_EARLY_TERMINATION_FEE
    )

    recommendations = generate_recommendations(
        request.current_plan,
        usage,
        request.preferences,
        plans,
        suppliers,
        contract_terms,
    )

    return RecommendationResponse(
        recommendations=recommendations,
        data_quality=usage.data_quality,
        quality_score=calculate_data_quality_score(usage),
        warnings=get_warning_actions(validation.warnings),
    )
