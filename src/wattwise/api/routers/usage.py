"""Usage feed analysis routes."""

from fastapi import APIRouter

from wattwise.api.models.usage import (
    UsageAnalysisRequest,
    UsageAnalysisResponse,
    ValidationErrorDetail,
)
from wattwise.services.parser import parse_green_button_xml
from wattwise.services.validation import (
    calculate_data_quality_score,
    confidence_from_score,
    get_warning_actions,
    validate_usage_data,
)

router = APIRouter(prefix="/usage", tags=["Usage"])


@router.post("/analyze", response_model=UsageAnalysisResponse)
async def analyze_usage(request: UsageAnalysisRequest) -> UsageAnalysisResponse:
    """Parse a usage feed and report on its quality.

    Validation problems are reported in the body rather than as an error, so
    callers can show every issue at once.

    Parameters
    ----------
    request : UsageAnalysisRequest
        Usage feed

    Returns
    -------
    UsageAnalysisResponse
        Monthly usage, validation report, quality score and confidence

    Raises
    ------
    MalformedInputError
        If the feed cannot be parsed (400)
    UsageDataError
        If no readings or too few months are found (422)
    """
    usage = parse_green_button_xml(request.xml)
    validation = validate_usage_data(usage)
    score = calculate_data_quality_score(usage)

    return UsageAnalysisResponse(
        usage=usage,
        is_valid=validation.is_valid,
        errors=[ValidationErrorDetail(**error.to_dict()) for error in validation.errors],
        warnings=get_warning_actions(validation.warnings),
        quality_score=score,
        confidence=confidence_from_score(score),
    )
