"""Filter engine with pluggable rules and explanation trail."""

from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, Field

from techrfp.models.filters import FilterSpec
from techrfp.models.opportunity import Opportunity

from .rules import (
    apply_active_rule,
    apply_budget_rule,
    apply_deadline_rule,
    apply_organization_type_rule,
    apply_search_rule,
    apply_technology_rule,
)


class FilterResult(BaseModel):
    """Result of filtering an opportunity against a FilterSpec."""

    passed: bool = Field(..., description="All rules passed")
    explanations: list[str] = Field(default_factory=list)
    opportunity: Opportunity = Field(..., description="The opportunity that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded (active|search|technology|organization_type|budget|deadline)",
    )


RuleFn = Callable[[Opportunity, FilterSpec, datetime], tuple[bool, str, str]]


class FilterEngine:
    """
    Applies a FilterSpec to opportunities. Rules are conjunctive; the
    active-only rule always runs ahead of the FilterSpec criteria.
    """

    def __init__(self, spec: Optional[FilterSpec] = None, now: Optional[datetime] = None):
        self.spec = spec if spec is not None else FilterSpec()
        self.now = now or datetime.now(timezone.utc)
        self._rules: list[RuleFn] = [
            apply_active_rule,
            apply_search_rule,
            apply_technology_rule,
            apply_organization_type_rule,
            apply_budget_rule,
            apply_deadline_rule,
        ]

    def filter(self, opp: Opportunity) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        all_passed = True
        excluded_by: Optional[str] = None

        for rule_fn in self._rules:
            passed, explanation, rule_id = rule_fn(opp, self.spec, self.now)
            explanations.append(explanation)
            if not passed:
                all_passed = False
                if excluded_by is None:
                    excluded_by = rule_id

        return FilterResult(
            passed=all_passed,
            explanations=explanations,
            opportunity=opp,
            excluded_by_rule=excluded_by,
        )

    def filter_many(self, opportunities: list[Opportunity]) -> list[FilterResult]:
        """Filter multiple opportunities; returns all with full results."""
        return [self.filter(opp) for opp in opportunities]

    def filter_passed(self, opportunities: list[Opportunity]) -> list[Opportunity]:
        """Filter and return only the opportunities that passed every rule."""
        return [r.opportunity for r in self.filter_many(opportunities) if r.passed]
