"""Listing filter criteria and their parsing from query strings and YAML presets."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for filter presets. Run: poetry install"
    ) from e
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

# Query-string values that mean "no constraint"
_UNSET_VALUES = ("", "any", "all")

# Widest deadline window accepted (about a century)
MAX_DEADLINE_DAYS = 36_500


class InvalidFilterError(ValueError):
    """Raised when filter input cannot be turned into a FilterSpec."""


class BudgetRange(BaseModel):
    """Inclusive budget bounds; high=None means unbounded."""

    model_config = ConfigDict(frozen=True)

    low: int = Field(default=0, ge=0)
    high: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "BudgetRange":
        if self.high is not None and self.high < self.low:
            raise ValueError(f"budget upper bound {self.high} is below lower bound {self.low}")
        return self

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["BudgetRange"]:
        """
        Parse "100000-500000", "500000+" or "500000-" into a range.
        Blank, "any" and "all" return None.
        """
        if value is None or value.strip().lower() in _UNSET_VALUES:
            return None
        text = value.strip().replace(",", "").replace("_", "")
        if text.endswith("+"):
            low_text, high_text = text[:-1], ""
        elif "-" in text:
            low_text, _, high_text = text.partition("-")
        else:
            raise InvalidFilterError(f"Invalid budget range: {value!r} (expected LOW-HIGH or LOW+)")
        try:
            low = int(low_text)
            high = int(high_text) if high_text else None
        except ValueError:
            raise InvalidFilterError(f"Invalid budget range: {value!r}") from None
        try:
            return cls(low=low, high=high)
        except ValidationError as e:
            raise InvalidFilterError(f"Invalid budget range: {value!r}") from e


def _parse_days(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidFilterError(f"Invalid deadline filter: {value!r} (expected number of days)")
    if isinstance(value, int):
        return value
    text = str(value).strip().lower()
    if text in _UNSET_VALUES:
        return None
    try:
        return int(text)
    except ValueError:
        raise InvalidFilterError(f"Invalid deadline filter: {value!r} (expected number of days)") from None


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise InvalidFilterError(f"Expected a name or a list of names, got {value!r}")
    return [str(v) for v in value if str(v).strip()]


class FilterSpec(BaseModel):
    """
    Optional listing criteria; an omitted field means no constraint.
    Empty category/type sets behave like omitted fields.
    """

    model_config = ConfigDict(frozen=True)

    search_text: Optional[str] = None
    technology_categories: frozenset[str] = Field(default_factory=frozenset)
    organization_types: frozenset[str] = Field(default_factory=frozenset)
    budget_range: Optional[BudgetRange] = None
    deadline_within_days: Optional[int] = Field(default=None, ge=0, le=MAX_DEADLINE_DAYS)

    @field_validator("search_text")
    @classmethod
    def _blank_search(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("technology_categories", "organization_types", mode="before")
    @classmethod
    def _coerce_set(cls, value: Any) -> frozenset[str]:
        return frozenset(_as_list(value))

    @field_validator("budget_range", mode="before")
    @classmethod
    def _coerce_budget(cls, value: Any) -> Any:
        if isinstance(value, str):
            return BudgetRange.parse(value)
        return value

    @field_validator("deadline_within_days", mode="before")
    @classmethod
    def _coerce_days(cls, value: Any) -> Optional[int]:
        return _parse_days(value)

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "FilterSpec":
        """
        Build from routing-layer query parameters
        (search, technologies, organizationTypes, budgetRange, deadlineFilter).
        Raises InvalidFilterError on malformed input.
        """
        data = {
            "search_text": params.get("search"),
            "technology_categories": params.get("technologies"),
            "organization_types": params.get("organizationTypes"),
            "budget_range": params.get("budgetRange"),
            "deadline_within_days": params.get("deadlineFilter"),
        }
        return cls._validate_or_raise(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "FilterSpec":
        """Load a saved filter preset. Supports nested (filters:) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        if not isinstance(data, dict):
            raise InvalidFilterError(f"Filter preset {path} must be a mapping")
        filters = data["filters"] if "filters" in data else data
        if filters is None:
            filters = {}
        if not isinstance(filters, dict):
            raise InvalidFilterError(f"Filter preset {path}: filters must be a mapping")
        return cls._validate_or_raise(filters)

    @classmethod
    def _validate_or_raise(cls, data: Mapping[str, Any]) -> "FilterSpec":
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidFilterError(str(e)) from e
