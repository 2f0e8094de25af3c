"""Source records as received, before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawOpportunity(BaseModel):
    """
    One record exactly as a source returned it. Only the envelope is typed;
    field data is read defensively during normalization.
    """

    model_config = ConfigDict(extra="allow")

    source: str = Field(default="", description="Connector source_id that produced the record")
    data: dict[str, Any] = Field(default_factory=dict)

    def native_id(self, key: str) -> str | None:
        """Source-native identifier under key, as a stripped string; None if blank."""
        value = self.data.get(key)
        if value is None:
            return None
        text = str(value).strip()
        return text or None
