"""Summary statistics over the whole store (active and inactive)."""

import math
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from techrfp.store.base import BaseOpportunityStore

DEADLINE_SOON_DAYS = 30
_SECONDS_PER_DAY = 24 * 60 * 60


class LiveSummary(BaseModel):
    """Headline figures for the current collection."""

    total: int = 0
    priority_count: int = 0
    total_budget: int = 0
    avg_budget: int = 0
    deadlines_soon_count: int = 0


def technology_counts(store: BaseOpportunityStore) -> dict[str, int]:
    """Number of stored opportunities per technology category."""
    return dict(Counter(opp.technology_category for opp in store.all()))


def _days_until(deadline: datetime, now: datetime) -> int:
    """Whole days until deadline, rounded up; negative when past."""
    return math.ceil((deadline - now).total_seconds() / _SECONDS_PER_DAY)


def live_summary(store: BaseOpportunityStore, now: Optional[datetime] = None) -> LiveSummary:
    """
    Totals over every stored record. Missing budget bounds count as 0;
    avg_budget is the mean of each record's budget midpoint, rounded half up.
    """
    now = now or datetime.now(timezone.utc)
    opportunities = store.all()
    if not opportunities:
        return LiveSummary()

    midpoints = [((o.budget_min or 0) + (o.budget_max or 0)) / 2 for o in opportunities]
    return LiveSummary(
        total=len(opportunities),
        priority_count=sum(1 for o in opportunities if o.is_priority_category),
        total_budget=sum(o.budget_max or 0 for o in opportunities),
        avg_budget=math.floor(sum(midpoints) / len(opportunities) + 0.5),
        deadlines_soon_count=sum(
            1 for o in opportunities if _days_until(o.deadline, now) <= DEADLINE_SOON_DAYS
        ),
    )
