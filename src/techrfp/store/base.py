"""Opportunity store interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from techrfp.models.opportunity import Opportunity


class BaseOpportunityStore(ABC):
    """
    Holds the canonical opportunity collection.
    Upsert is a total overwrite keyed by id; lookups return None when absent.
    """

    @abstractmethod
    def get(self, opp_id: str) -> Optional[Opportunity]:
        """Get single opportunity by id."""

    @abstractmethod
    def upsert(self, opp: Opportunity) -> Opportunity:
        """Insert or replace by id. Returns the stored value."""

    @abstractmethod
    def all(self) -> list[Opportunity]:
        """Snapshot of every stored opportunity, in no particular order."""

    @abstractmethod
    def replace_all(self, opportunities: Iterable[Opportunity]) -> int:
        """Swap the whole collection in one step. Returns the new size."""

    @abstractmethod
    def __len__(self) -> int:
        pass

    @staticmethod
    def _with_defaults(opp: Opportunity, now: Optional[datetime] = None) -> Opportunity:
        """Apply store-assigned defaults (posted_date = now when absent)."""
        if opp.posted_date is not None:
            return opp
        return opp.model_copy(update={"posted_date": now or datetime.now(timezone.utc)})
