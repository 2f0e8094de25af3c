"""Unit tests for SamGovConnector."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable

import httpx
import pytest

from techrfp.connectors.base import SourceUnavailableError
from techrfp.connectors.samgov import SamGovConnector, SamGovPage
from techrfp.models.opportunity import Opportunity
from techrfp.models.raw import RawOpportunity

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _connector(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> SamGovConnector:
    """Connector wired to a mock transport."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    kwargs.setdefault("api_key", "test-key")
    return SamGovConnector(client=client, **kwargs)


class TestFetchRawOpportunities:
    """Tests for fetch_raw_opportunities."""

    def test_sends_expected_params(self, samgov_payload: dict) -> None:
        """Query params carry key, MM/DD/YYYY window, paging and title."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=samgov_payload)

        page = _connector(handler).fetch_raw_opportunities(
            "drupal", date(2025, 5, 1), date(2025, 6, 30), limit=25, offset=50
        )

        params = seen[0].url.params
        assert params["api_key"] == "test-key"
        assert params["postedFrom"] == "05/01/2025"
        assert params["postedTo"] == "06/30/2025"
        assert params["limit"] == "25"
        assert params["offset"] == "50"
        assert params["title"] == "drupal"
        assert isinstance(page, SamGovPage)
        assert page.total_records == 1
        assert len(page.opportunities) == 1
        assert page.opportunities[0].data["noticeId"] == "abc123def456"
        assert page.opportunities[0].source == "samgov"

    def test_no_title_param_without_keywords(self, samgov_payload: dict) -> None:
        """Blank keywords do not send a title filter."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=samgov_payload)

        _connector(handler).fetch_raw_opportunities(None, "05/01/2025", "05/31/2025")
        assert "title" not in seen[0].url.params
        assert seen[0].url.params["postedFrom"] == "05/01/2025"

    def test_empty_result(self) -> None:
        """Missing opportunitiesData gives an empty page."""
        page = _connector(lambda r: httpx.Response(200, json={"totalRecords": 0})).fetch_raw_opportunities(
            None, date(2025, 5, 1), date(2025, 5, 31)
        )
        assert page.opportunities == []

    def test_non_dict_records_skipped(self) -> None:
        """Junk entries in opportunitiesData are ignored."""
        payload = {"totalRecords": 2, "opportunitiesData": [{"noticeId": "a"}, "junk"]}
        page = _connector(lambda r: httpx.Response(200, json=payload)).fetch_raw_opportunities(
            None, date(2025, 5, 1), date(2025, 5, 31)
        )
        assert [r.data["noticeId"] for r in page.opportunities] == ["a"]

    @pytest.mark.parametrize("status", [401, 429, 500, 503])
    def test_http_error_status(self, status: int) -> None:
        """Non-success status raises SourceUnavailableError."""
        connector = _connector(lambda r: httpx.Response(status, json={"error": "nope"}))
        with pytest.raises(SourceUnavailableError, match=str(status)):
            connector.fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_transport_error(self) -> None:
        """Connection failures raise SourceUnavailableError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SourceUnavailableError):
            _connector(handler).fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_timeout(self) -> None:
        """Timeouts raise SourceUnavailableError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(SourceUnavailableError):
            _connector(handler).fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_non_json_body(self) -> None:
        """Unreadable body raises SourceUnavailableError."""
        connector = _connector(lambda r: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(SourceUnavailableError, match="non-JSON"):
            connector.fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_non_object_payload(self) -> None:
        """A JSON list is not a search response."""
        connector = _connector(lambda r: httpx.Response(200, json=[1, 2]))
        with pytest.raises(SourceUnavailableError):
            connector.fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_malformed_total_records(self) -> None:
        """A non-numeric totalRecords raises SourceUnavailableError."""
        payload = {"totalRecords": "n/a", "opportunitiesData": []}
        connector = _connector(lambda r: httpx.Response(200, json=payload))
        with pytest.raises(SourceUnavailableError, match="malformed"):
            connector.fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_non_list_opportunities_data(self) -> None:
        """A scalar opportunitiesData raises SourceUnavailableError."""
        payload = {"totalRecords": 1, "opportunitiesData": 5}
        connector = _connector(lambda r: httpx.Response(200, json=payload))
        with pytest.raises(SourceUnavailableError, match="malformed"):
            connector.fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))

    def test_missing_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No key configured raises before any request is made."""
        monkeypatch.delenv("SAM_GOV_API_KEY", raising=False)
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        connector = _connector(handler, api_key=None)
        with pytest.raises(SourceUnavailableError, match="API key"):
            connector.fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))
        assert calls == []

    def test_api_key_from_env(self, monkeypatch: pytest.MonkeyPatch, samgov_payload: dict) -> None:
        """SAM_GOV_API_KEY is used when no key is passed."""
        monkeypatch.setenv("SAM_GOV_API_KEY", "env-key")
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=samgov_payload)

        _connector(handler, api_key=None).fetch_raw_opportunities(None, date(2025, 5, 1), date(2025, 5, 31))
        assert seen[0].url.params["api_key"] == "env-key"


class TestSearch:
    """Tests for search and fetch_all."""

    def test_search_uses_filters(self, samgov_payload: dict) -> None:
        """Filters dict feeds the window and paging."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=samgov_payload)

        raws = _connector(handler).search(
            "website",
            {"posted_from": date(2025, 1, 1), "posted_to": date(2025, 1, 31), "limit": 10, "offset": 20},
        )
        assert len(raws) == 1
        params = seen[0].url.params
        assert params["postedFrom"] == "01/01/2025"
        assert params["offset"] == "20"

    def test_fetch_all_normalizes(self, samgov_payload: dict) -> None:
        """fetch_all returns normalized opportunities."""
        opps = _connector(lambda r: httpx.Response(200, json=samgov_payload)).fetch_all("drupal")
        assert len(opps) == 1
        assert isinstance(opps[0], Opportunity)
        assert opps[0].id == "samgov:abc123def456"


class TestNormalize:
    """Tests for normalize."""

    def test_full_record(self, raw_samgov: RawOpportunity) -> None:
        """Every field is derived from the sample record."""
        connector = SamGovConnector(api_key="k")
        opp = connector.normalize(raw_samgov, now=NOW)

        assert opp.id == "samgov:abc123def456"
        assert opp.source == "samgov"
        assert opp.source_id == "abc123def456"
        assert opp.title == "Drupal CMS Migration and Support Services"
        assert opp.organization == "DEPT OF DEFENSE"
        assert opp.organization_type == "Defense"
        assert opp.technology_category == "Drupal"
        assert opp.is_priority_category is True
        assert opp.location == "Huntsville, Alabama"
        assert (opp.budget_min, opp.budget_max) == (100_000, 500_000)
        assert opp.deadline == datetime(2025, 7, 1, 21, 0, tzinfo=timezone.utc)
        assert opp.posted_date == datetime(2025, 5, 20, tzinfo=timezone.utc)
        assert opp.contact_email == "pat.smith@army.mil"
        assert opp.organization_website == "https://www.defense.gov"
        assert opp.document_url.startswith("https://sam.gov/api/")
        assert opp.is_active is True
        assert "W912-25-R-0001" in opp.description

    def test_stable_id_across_calls(self, raw_samgov: RawOpportunity) -> None:
        """Same notice normalizes to the same id."""
        connector = SamGovConnector(api_key="k")
        assert connector.normalize(raw_samgov).id == connector.normalize(raw_samgov).id

    def test_minimal_record_never_raises(self) -> None:
        """Empty record gets defaults for everything."""
        opp = SamGovConnector(api_key="k").normalize(RawOpportunity(data={}), now=NOW)
        assert opp.id.startswith("samgov:")
        assert opp.title == "Untitled"
        assert opp.organization == "Federal Agency"
        assert opp.organization_type == "Government"
        assert opp.location == "Washington, DC"
        assert opp.technology_category == "Technology Services"
        assert (opp.budget_min, opp.budget_max) == (75_000, 300_000)
        assert opp.deadline == NOW + timedelta(days=30)
        assert opp.posted_date == NOW
        assert opp.is_active is False
        assert opp.is_priority_category is False

    def test_malformed_fields_never_raise(self) -> None:
        """Wrong types and unparseable dates fall back to defaults."""
        raw = RawOpportunity(
            data={
                "noticeId": 42,
                "title": None,
                "fullParentPathName": ["not", "a", "string"],
                "responseDeadLine": "someday",
                "postedDate": 20250101,
                "naicsCode": 541511,
                "pointOfContact": "nobody",
                "placeOfPerformance": None,
            }
        )
        opp = SamGovConnector(api_key="k").normalize(raw, now=NOW)
        assert opp.id == "samgov:42"
        assert opp.title == "Untitled"
        assert opp.organization == "Federal Agency"
        assert opp.deadline == NOW + timedelta(days=30)
        assert opp.technology_category == "Software Development"
        assert opp.contact_email is None

    def test_inactive_sentinel(self, sample_samgov_record: dict) -> None:
        """Only the literal 'Yes' marks a notice active."""
        record = dict(sample_samgov_record, active="yes")
        opp = SamGovConnector(api_key="k").normalize(RawOpportunity(data=record))
        assert opp.is_active is False

    def test_priority_category_configurable(self, sample_samgov_record: dict) -> None:
        """Priority category comes from configuration, compared case-insensitively."""
        record = dict(sample_samgov_record, title="React dashboard")
        connector = SamGovConnector(api_key="k", priority_category="react")
        opp = connector.normalize(RawOpportunity(data=record))
        assert opp.technology_category == "React"
        assert opp.is_priority_category is True
