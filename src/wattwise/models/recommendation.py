"""Recommendation output and validation report models."""

from typing import Literal

from pydantic import BaseModel, Field

from wattwise.config.constants import DEFAULT_SIGNUP_URL
from wattwise.exceptions.errors import UsageDataError
from wattwise.models.base import DomainModel
from wattwise.models.plan import PlanWithCosts, PlanWithScenarios

Confidence = Literal["high", "medium", "low"]
Severity = Literal["info", "warning", "important"]


class Recommendation(DomainModel):
    """One shortlisted plan with its explanation.

    Attributes
    ----------
    plan : PlanWithScenarios | PlanWithCosts
        Priced plan, with scenarios when contract terms were supplied
    explanation : str
        Templated, human-readable summary
    confidence : str
        Trust label derived from the usage data quality score
    signup_url : str
        Where to sign up with the plan's supplier
    """

    plan: PlanWithScenarios | PlanWithCosts
    explanation: str
    confidence: Confidence
    signup_url: str = DEFAULT_SIGNUP_URL


class WarningAction(DomainModel):
    """Remediation advice for one data quality warning."""

    warning: str
    action: str
    severity: Severity


class ValidationResult(BaseModel):
    """Outcome of validating a usage history.

    Attributes
    ----------
    errors : list[UsageDataError]
        Blocking problems; any entry rejects the request
    warnings : list[str]
        Non-blocking observations
    """

    model_config = {"arbitrary_types_allowed": True}

    errors: list[UsageDataError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the first blocking error, if any.

        Raises
        ------
        UsageDataError
            First error found during validation
        """
        if self.errors:
            raise self.errors[0]
