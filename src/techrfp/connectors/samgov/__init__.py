"""SAM.gov contract opportunities connector."""

from .connector import SamGovConnector, SamGovPage

__all__ = ["SamGovConnector", "SamGovPage"]
