"""Canonical ordering and presentation re-sorts."""

from datetime import datetime, timezone
from enum import Enum

from techrfp.models.opportunity import Opportunity

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SortMode(str, Enum):
    """Listing order. DEADLINE is the canonical priority-then-deadline order."""

    DEADLINE = "deadline"
    BUDGET = "budget"
    POSTED = "posted"


def canonical_key(opp: Opportunity) -> tuple[bool, datetime]:
    """Priority category first, then soonest deadline."""
    return (not opp.is_priority_category, opp.deadline)


def rank(opportunities: list[Opportunity]) -> list[Opportunity]:
    """Stable sort into canonical order."""
    return sorted(opportunities, key=canonical_key)


def _budget_value(opp: Opportunity) -> int:
    return opp.budget_max or opp.budget_min or 0


def apply_sort(ranked: list[Opportunity], mode: SortMode | str = SortMode.DEADLINE) -> list[Opportunity]:
    """
    Re-sort an already ranked list for display. Both re-sorts are stable, so
    ties keep their canonical order.
    """
    mode = SortMode(mode)
    if mode is SortMode.BUDGET:
        return sorted(ranked, key=_budget_value, reverse=True)
    if mode is SortMode.POSTED:
        return sorted(ranked, key=lambda o: o.posted_date or _EPOCH, reverse=True)
    return rank(ranked)
