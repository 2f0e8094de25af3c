"""Filter rules: each returns (passed, explanation, rule_id)."""

from datetime import datetime, timedelta
from typing import Optional

from techrfp.models.filters import FilterSpec
from techrfp.models.opportunity import Opportunity


def _normalize_for_match(text: Optional[str]) -> str:
    """Lowercase for matching; empty string if None."""
    return (text or "").lower()


def apply_active_rule(opp: Opportunity, spec: FilterSpec, now: datetime) -> tuple[bool, str, str]:
    """Always on: inactive opportunities are never listed."""
    if not opp.is_active:
        return False, "Excluded: opportunity is inactive", "active"
    return True, "Active", "active"


def apply_search_rule(opp: Opportunity, spec: FilterSpec, now: datetime) -> tuple[bool, str, str]:
    """Case-insensitive substring in title, description or organization."""
    if not spec.search_text:
        return True, "Search filter not set", "search"

    needle = spec.search_text.lower()
    for field_name in ("title", "description", "organization"):
        if needle in _normalize_for_match(getattr(opp, field_name)):
            return True, f"Matches search '{spec.search_text}' in {field_name}", "search"

    return False, f"Excluded: search '{spec.search_text}' not found", "search"


def apply_technology_rule(opp: Opportunity, spec: FilterSpec, now: datetime) -> tuple[bool, str, str]:
    """Technology category must be one of the selected categories."""
    if not spec.technology_categories:
        return True, "Technology filter not set", "technology"

    if opp.technology_category in spec.technology_categories:
        return True, f"Matches technology: {opp.technology_category}", "technology"

    return False, f"Excluded: technology {opp.technology_category} not selected", "technology"


def apply_organization_type_rule(opp: Opportunity, spec: FilterSpec, now: datetime) -> tuple[bool, str, str]:
    """Organization type must be one of the selected types."""
    if not spec.organization_types:
        return True, "Organization type filter not set", "organization_type"

    if opp.organization_type in spec.organization_types:
        return True, f"Matches organization type: {opp.organization_type}", "organization_type"

    return (
        False,
        f"Excluded: organization type {opp.organization_type} not selected",
        "organization_type",
    )


def apply_budget_rule(opp: Opportunity, spec: FilterSpec, now: datetime) -> tuple[bool, str, str]:
    """
    Budget: an opportunity without budget_min always passes.
    Otherwise budget_min >= low, and budget_max <= high when both the upper
    bound and budget_max are present.
    """
    budget = spec.budget_range
    if budget is None:
        return True, "Budget filter not set", "budget"

    if opp.budget_min is None:
        return True, "Budget not applicable (no minimum budget on opportunity)", "budget"

    if opp.budget_min < budget.low:
        return False, f"Excluded: min budget {opp.budget_min} below {budget.low}", "budget"

    if budget.high is not None and opp.budget_max is not None and opp.budget_max > budget.high:
        return False, f"Excluded: max budget {opp.budget_max} above {budget.high}", "budget"

    return True, "Within budget range", "budget"


def apply_deadline_rule(opp: Opportunity, spec: FilterSpec, now: datetime) -> tuple[bool, str, str]:
    """
    Deadline on or before now + N days. There is no lower bound, so past
    deadlines pass.
    """
    if spec.deadline_within_days is None:
        return True, "Deadline filter not set", "deadline"

    cutoff = now + timedelta(days=spec.deadline_within_days)
    if opp.deadline <= cutoff:
        return True, f"Deadline {opp.deadline.isoformat()} within {spec.deadline_within_days} days", "deadline"

    return (
        False,
        f"Excluded: deadline {opp.deadline.isoformat()} later than {spec.deadline_within_days} days out",
        "deadline",
    )
