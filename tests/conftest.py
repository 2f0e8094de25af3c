"""Pytest fixtures for techrfp tests."""

from pathlib import Path
from typing import Any

import pytest

from techrfp.models.raw import RawOpportunity
from techrfp.store import OpportunityStore, SqliteOpportunityStore


@pytest.fixture
def sample_samgov_record() -> dict[str, Any]:
    """Sample SAM.gov v2 search record for testing normalization."""
    return {
        "noticeId": "abc123def456",
        "title": "Drupal CMS Migration and Support Services",
        "solicitationNumber": "W912-25-R-0001",
        "fullParentPathName": "DEPT OF DEFENSE.DEPT OF THE ARMY.AMC",
        "postedDate": "2025-05-20",
        "type": "Solicitation",
        "responseDeadLine": "2025-07-01T17:00:00-04:00",
        "naicsCode": "541511",
        "active": "Yes",
        "pointOfContact": [
            {"fullName": "Pat Smith", "email": "pat.smith@army.mil", "type": "primary"},
        ],
        "placeOfPerformance": {
            "city": {"code": "12345", "name": "Huntsville"},
            "state": {"code": "AL", "name": "Alabama"},
        },
        "officeAddress": {"city": "Redstone Arsenal", "state": "AL", "zipcode": "35898"},
        "uiLink": "https://sam.gov/opp/abc123def456/view",
        "resourceLinks": ["https://sam.gov/api/prod/opps/v3/opportunities/resources/files/1/download"],
    }


@pytest.fixture
def raw_samgov(sample_samgov_record: dict[str, Any]) -> RawOpportunity:
    """RawOpportunity built from the sample record."""
    return RawOpportunity(data=sample_samgov_record)


@pytest.fixture
def samgov_payload(sample_samgov_record: dict[str, Any]) -> dict[str, Any]:
    """Search response envelope with one record."""
    return {
        "totalRecords": 1,
        "limit": 50,
        "offset": 0,
        "opportunitiesData": [sample_samgov_record],
    }


@pytest.fixture
def temp_db(tmp_path: Path) -> Path:
    """Temporary database path for isolated tests."""
    return tmp_path / "techrfp.db"


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request: pytest.FixtureRequest, temp_db: Path):
    """Each store implementation, empty."""
    if request.param == "memory":
        return OpportunityStore()
    return SqliteOpportunityStore(temp_db)
