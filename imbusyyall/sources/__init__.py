"""
Data Sources - Registry of emulated log styles
"""
import logging
from typing import Dict, List, Type

from .apache import ApacheSource
from .base import DataSource
from .django import DjangoSource
from .nginx import NginxSource
from .node import NodeSource
from .rails import RailsSource
from .rfc3164 import Rfc3164Source
from .rfc5424 import Rfc5424Source
from .sample import SampleSource

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "rails"

SOURCES: Dict[str, Type[DataSource]] = {
    source.name: source
    for source in (
        ApacheSource,
        DjangoSource,
        NginxSource,
        NodeSource,
        RailsSource,
        Rfc3164Source,
        Rfc5424Source,
        SampleSource,
    )
}


def available_sources() -> List[str]:
    return sorted(SOURCES)


def get_source(name: str) -> DataSource:
    """Instantiate a data source by name, falling back to rails"""
    source_cls = SOURCES.get(name.strip().lower())
    if source_cls is None:
        logger.warning(f"Unknown data source: {name}. Using {DEFAULT_SOURCE} as default.")
        source_cls = SOURCES[DEFAULT_SOURCE]
    return source_cls()


__all__ = ["DataSource", "SOURCES", "DEFAULT_SOURCE", "available_sources", "get_source"]
