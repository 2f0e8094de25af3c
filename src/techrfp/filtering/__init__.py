"""Filtering and ranking of opportunities."""

from techrfp.filtering.engine import FilterEngine, FilterResult
from techrfp.filtering.ranking import SortMode, apply_sort, rank

__all__ = ["FilterEngine", "FilterResult", "SortMode", "apply_sort", "rank"]
