"""Storage for opportunities and ingest run history."""

from techrfp.store.base import BaseOpportunityStore
from techrfp.store.memory_store import OpportunityStore
from techrfp.store.seed import seed_opportunities
from techrfp.store.sqlite_store import RunRecord, SqliteOpportunityStore

__all__ = [
    "BaseOpportunityStore",
    "OpportunityStore",
    "RunRecord",
    "SqliteOpportunityStore",
    "seed_opportunities",
]
