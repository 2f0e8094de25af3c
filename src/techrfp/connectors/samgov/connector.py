"""SAM.gov connector using the public Opportunities v2 search API.

The API returns a JSON envelope (totalRecords, limit, offset,
opportunitiesData). One request is one unit of work: there is a
request-level timeout and no retry loop; retrying is the caller's concern.
"""

import logging
import os
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from techrfp.connectors.base import BaseConnector, SourceUnavailableError
from techrfp.models.opportunity import Opportunity
from techrfp.models.raw import RawOpportunity

from .constants import (
    ACTIVE,
    ACTIVE_SENTINEL,
    DATE_PARAM_FORMAT,
    DEFAULT_BASE_URL,
    DEFAULT_DEADLINE_DAYS,
    NAICS_CODE,
    NOTICE_ID,
    OPPORTUNITIES_DATA,
    PARENT_PATH,
    POSTED_DATE,
    RESPONSE_DEADLINE,
    TITLE,
    TOTAL_RECORDS,
)
from .parsers import (
    build_description,
    build_website,
    classify_organization_type,
    classify_technology,
    estimate_budget,
    extract_contact_email,
    extract_document_url,
    extract_location,
    extract_organization,
    parse_date,
)

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_CATEGORY = "Drupal"


class SamGovPage(BaseModel):
    """One page of search results."""

    total_records: int = 0
    limit: int = 0
    offset: int = 0
    opportunities: list[RawOpportunity] = Field(default_factory=list)


def _format_date_param(value: date | str) -> str:
    if isinstance(value, str):
        return value
    return value.strftime(DATE_PARAM_FORMAT)


class SamGovConnector(BaseConnector):
    """
    Connector for SAM.gov contract opportunities.
    Normalization infers technology category, organization type, location
    and an estimated budget band from the notice fields.
    """

    source_id = "samgov"

    DEFAULT_HEADERS = {
        "User-Agent": "techrfp-finder/0.1 (technology RFP finder)",
        "Accept": "application/json",
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        priority_category: str = DEFAULT_PRIORITY_CATEGORY,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            api_key: SAM.gov API key (falls back to SAM_GOV_API_KEY env)
            base_url: Search endpoint
            timeout: Request-level timeout in seconds
            priority_category: Technology category ranked first in listings
            client: Optional httpx client
        """
        self._api_key = api_key or os.environ.get("SAM_GOV_API_KEY")
        self._base_url = base_url
        self.priority_category = priority_category
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    def fetch_raw_opportunities(
        self,
        keywords: Optional[str],
        posted_from: date | str,
        posted_to: date | str,
        limit: int = 50,
        offset: int = 0,
    ) -> SamGovPage:
        """
        Fetch one page of raw notices posted within [posted_from, posted_to].
        Raises SourceUnavailableError on transport failure, non-success
        status or an unreadable body.
        """
        if not self._api_key:
            raise SourceUnavailableError("SAM.gov API key is not configured (set SAM_GOV_API_KEY)")

        params: dict[str, str | int] = {
            "api_key": self._api_key,
            "postedFrom": _format_date_param(posted_from),
            "postedTo": _format_date_param(posted_to),
            "limit": limit,
            "offset": offset,
        }
        if keywords:
            params["title"] = keywords

        try:
            response = self._client.get(self._base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("SAM.gov returned HTTP %s for %r", e.response.status_code, keywords)
            raise SourceUnavailableError(f"SAM.gov API error: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("SAM.gov request failed for %r: %s", keywords, e)
            raise SourceUnavailableError(f"SAM.gov request failed: {e}") from e
        except ValueError as e:
            logger.warning("SAM.gov returned a non-JSON body for %r", keywords)
            raise SourceUnavailableError("SAM.gov returned a non-JSON body") from e

        if not isinstance(payload, dict):
            logger.warning("SAM.gov returned a non-object payload for %r", keywords)
            raise SourceUnavailableError("SAM.gov returned an unexpected payload")

        records = payload.get(OPPORTUNITIES_DATA) or []
        if not isinstance(records, list):
            logger.warning("SAM.gov returned a malformed %s for %r", OPPORTUNITIES_DATA, keywords)
            raise SourceUnavailableError(f"SAM.gov returned a malformed {OPPORTUNITIES_DATA}")

        try:
            return SamGovPage(
                total_records=payload.get(TOTAL_RECORDS) or 0,
                limit=payload.get("limit") or limit,
                offset=payload.get("offset") or offset,
                opportunities=[RawOpportunity(source=self.source_id, data=r) for r in records if isinstance(r, dict)],
            )
        except ValidationError as e:
            logger.warning("SAM.gov returned a malformed response envelope for %r: %s", keywords, e)
            raise SourceUnavailableError("SAM.gov returned a malformed response envelope") from e

    def search(
        self,
        query: Optional[str] = None,
        filters: Optional[dict] = None,
    ) -> list[RawOpportunity]:
        """
        Fetch one page of opportunities.
        filters: optional dict with posted_from, posted_to, limit, offset.
        Default window is the last 30 days.
        """
        filters = filters or {}
        today = datetime.now(timezone.utc).date()
        page = self.fetch_raw_opportunities(
            query,
            filters.get("posted_from", today - timedelta(days=30)),
            filters.get("posted_to", today),
            limit=filters.get("limit", 50),
            offset=filters.get("offset", 0),
        )
        return page.opportunities

    def normalize(self, raw: RawOpportunity, now: Optional[datetime] = None) -> Opportunity:
        """Convert a SAM.gov notice to Opportunity. Never raises on bad field data."""
        d = raw.data
        now = now or datetime.now(timezone.utc)

        notice_id = raw.native_id(NOTICE_ID)
        opp_id = f"{self.source_id}:{notice_id}" if notice_id else f"{self.source_id}:{uuid.uuid4()}"

        raw_title = d.get(TITLE)
        title = raw_title.strip() if isinstance(raw_title, str) and raw_title.strip() else "Untitled"
        naics_code = d.get(NAICS_CODE)
        naics_code = str(naics_code) if naics_code is not None else None
        org_path = d.get(PARENT_PATH) if isinstance(d.get(PARENT_PATH), str) else None

        category = classify_technology(title, naics_code)
        organization = extract_organization(org_path)

        return Opportunity(
            id=opp_id,
            source=self.source_id,
            source_id=notice_id,
            title=title,
            organization=organization,
            description=build_description(d, title),
            technology_category=category,
            organization_type=classify_organization_type(org_path),
            location=extract_location(d),
            budget_min=estimate_budget(naics_code, "min"),
            budget_max=estimate_budget(naics_code, "max"),
            deadline=parse_date(d.get(RESPONSE_DEADLINE)) or now + timedelta(days=DEFAULT_DEADLINE_DAYS),
            posted_date=parse_date(d.get(POSTED_DATE)) or now,
            contact_email=extract_contact_email(d),
            organization_website=build_website(organization),
            document_url=extract_document_url(d),
            is_priority_category=category.lower() == self.priority_category.lower(),
            is_active=d.get(ACTIVE) == ACTIVE_SENTINEL,
        )
