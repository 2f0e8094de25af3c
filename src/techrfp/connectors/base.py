"""Abstract base class for source connectors."""

from abc import ABC, abstractmethod
from typing import Optional

from techrfp.models.opportunity import Opportunity
from techrfp.models.raw import RawOpportunity


class SourceUnavailableError(RuntimeError):
    """The external source could not be reached or returned an unusable response."""


class BaseConnector(ABC):
    """
    Standard interface for RFP source connectors.
    Connectors fetch raw records and normalize them into Opportunity.
    Fetch failures raise SourceUnavailableError; normalize never raises.
    """

    source_id: str = ""

    @abstractmethod
    def search(self, query: Optional[str] = None, filters: Optional[dict] = None) -> list[RawOpportunity]:
        """
        List or search opportunities; returns raw format from source.
        """
        pass

    @abstractmethod
    def normalize(self, raw: RawOpportunity) -> Opportunity:
        """
        Convert raw record to Opportunity.
        """
        pass

    def fetch_all(self, query: Optional[str] = None, filters: Optional[dict] = None) -> list[Opportunity]:
        """
        Fetch opportunities and return normalized list.
        Default implementation: search, then normalize each.
        """
        raw_list = self.search(query, filters)
        return [self.normalize(r) for r in raw_list]
