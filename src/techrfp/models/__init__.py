"""Data models for opportunities and listing filters."""

from techrfp.models.filters import BudgetRange, FilterSpec, InvalidFilterError
from techrfp.models.opportunity import Opportunity
from techrfp.models.raw import RawOpportunity

__all__ = ["BudgetRange", "FilterSpec", "InvalidFilterError", "Opportunity", "RawOpportunity"]
