"""In-memory opportunity store."""

import threading
from collections.abc import Iterable
from typing import Optional

from techrfp.models.opportunity import Opportunity
from techrfp.store.base import BaseOpportunityStore


class OpportunityStore(BaseOpportunityStore):
    """
    Dict-backed store guarded by one coarse lock.
    Opportunities are immutable, so returned values never alias mutable state.
    Bulk refresh builds a new dict and swaps it in under the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, Opportunity] = {}

    @classmethod
    def from_seed(cls, opportunities: Iterable[Opportunity]) -> "OpportunityStore":
        """Construct a store pre-loaded with the given records. No I/O."""
        store = cls()
        store.replace_all(opportunities)
        return store

    def get(self, opp_id: str) -> Optional[Opportunity]:
        with self._lock:
            return self._items.get(opp_id)

    def upsert(self, opp: Opportunity) -> Opportunity:
        stored = self._with_defaults(opp)
        with self._lock:
            self._items[stored.id] = stored
        return stored

    def all(self) -> list[Opportunity]:
        with self._lock:
            return list(self._items.values())

    def replace_all(self, opportunities: Iterable[Opportunity]) -> int:
        fresh: dict[str, Opportunity] = {}
        for opp in opportunities:
            stored = self._with_defaults(opp)
            fresh[stored.id] = stored
        with self._lock:
            self._items = fresh
        return len(fresh)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
