"""Source connectors for RFP ingestion."""

from techrfp.connectors.base import BaseConnector, SourceUnavailableError
from techrfp.connectors.registry import ConnectorRegistry

__all__ = ["BaseConnector", "ConnectorRegistry", "SourceUnavailableError"]
