"""Canonical opportunity model."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Opportunity(BaseModel):
    """Canonical RFP record produced by seeds and source connectors."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable identifier, never reassigned")
    source: str = Field(default="manual", description="Source identifier, e.g. 'samgov'")
    source_id: Optional[str] = Field(default=None, description="Native notice ID")

    title: str = Field(..., min_length=1)
    organization: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)

    technology_category: str = Field(..., min_length=1)
    organization_type: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)

    budget_min: Optional[int] = Field(default=None, ge=0)
    budget_max: Optional[int] = Field(default=None, ge=0)

    deadline: datetime
    posted_date: Optional[datetime] = None

    contact_email: Optional[str] = None
    organization_website: Optional[str] = None
    document_url: Optional[str] = None

    is_priority_category: bool = False
    is_active: bool = True

    @field_validator("deadline", "posted_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive datetimes are taken as UTC."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("contact_email", "organization_website", "document_url", "source_id")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None
