"""Pipeline orchestration: ingest from a source, list with filters and ranking."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from techrfp.connectors.base import BaseConnector, SourceUnavailableError
from techrfp.filtering import FilterEngine, SortMode, apply_sort, rank
from techrfp.models.filters import FilterSpec
from techrfp.models.opportunity import Opportunity
from techrfp.store.base import BaseOpportunityStore

logger = logging.getLogger(__name__)


@dataclass
class IngestRequest:
    """What to pull from a source: one search per query, paged by limit."""

    queries: list[Optional[str]]
    posted_from: date
    posted_to: date
    limit: int = 50
    max_pages: int = 1


@dataclass
class IngestReport:
    """Running totals for one ingest. Filled in as records are upserted."""

    source: str
    items_fetched: int = 0
    items_new: int = 0
    items_updated: int = 0
    failed_queries: list[str] = field(default_factory=list)


def default_window(
    now: Optional[datetime] = None,
    days_back: int = 30,
    days_forward: int = 120,
) -> tuple[date, date]:
    """Posted-date window around now, e.g. 30 days back to 120 days forward."""
    today = (now or datetime.now(timezone.utc)).date()
    return today - timedelta(days=days_back), today + timedelta(days=days_forward)


def list_opportunities(
    store: BaseOpportunityStore,
    spec: Optional[FilterSpec] = None,
    *,
    sort: SortMode | str = SortMode.DEADLINE,
    now: Optional[datetime] = None,
) -> list[Opportunity]:
    """
    Active opportunities matching every criterion in spec, priority category
    first and then by soonest deadline. Other sort modes re-sort that list.
    """
    engine = FilterEngine(spec, now=now)
    passed = engine.filter_passed(store.all())
    return apply_sort(rank(passed), sort)


def get_opportunity(store: BaseOpportunityStore, opp_id: str) -> Optional[Opportunity]:
    """Point lookup, including inactive records. None when not found."""
    return store.get(opp_id)


def ingest_from_source(
    store: BaseOpportunityStore,
    connector: BaseConnector,
    request: IngestRequest,
    *,
    report: Optional[IngestReport] = None,
) -> IngestReport:
    """
    Fetch, normalize and upsert records one at a time.
    SourceUnavailableError propagates to the caller; records upserted before
    the failure stay in the store and are counted in report.
    """
    report = report if report is not None else IngestReport(source=connector.source_id)

    for query in request.queries:
        fetched_for_query = 0
        for page_index in range(request.max_pages):
            filters = {
                "posted_from": request.posted_from,
                "posted_to": request.posted_to,
                "limit": request.limit,
                "offset": page_index * request.limit,
            }
            try:
                raw_list = connector.search(query, filters)
            except SourceUnavailableError as e:
                logger.warning("Ingest from %s failed for query %r: %s", connector.source_id, query, e)
                report.failed_queries.append(query or "")
                raise

            for raw in raw_list:
                opp = connector.normalize(raw)
                existed = store.get(opp.id) is not None
                store.upsert(opp)
                report.items_fetched += 1
                if existed:
                    report.items_updated += 1
                else:
                    report.items_new += 1

            fetched_for_query += len(raw_list)
            if len(raw_list) < request.limit:
                break

        logger.info("Ingested %d opportunities from %s for query %r", fetched_for_query, connector.source_id, query)

    return report
