"""Registry of source connectors by source id."""

from typing import Type

from techrfp.connectors.base import BaseConnector
from techrfp.connectors.samgov import SamGovConnector


class ConnectorRegistry:
    """Maps source ids (case-insensitive) to connector classes."""

    _connectors: dict[str, Type[BaseConnector]] = {
        SamGovConnector.source_id: SamGovConnector,
    }

    @classmethod
    def register(cls, connector_cls: Type[BaseConnector]) -> Type[BaseConnector]:
        """Add a connector under its source_id. Usable as a class decorator."""
        if not connector_cls.source_id:
            raise ValueError(f"{connector_cls.__name__} has no source_id")
        cls._connectors[connector_cls.source_id.lower()] = connector_cls
        return connector_cls

    @classmethod
    def get(cls, source_id: str, **kwargs) -> BaseConnector:
        """Connector instance for source_id; kwargs go to the connector's __init__."""
        connector_cls = cls._connectors.get(source_id.lower())
        if connector_cls is None:
            raise ValueError(f"Unknown source: {source_id}. Available: {cls.available_sources()}")
        return connector_cls(**kwargs)

    @classmethod
    def available_sources(cls) -> list[str]:
        """Registered source ids."""
        return sorted(cls._connectors)
