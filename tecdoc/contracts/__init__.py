"""
Contracts (data models).

This folder defines the shapes exchanged with the catalog service:
- the raw response tree handed over by transports (RawNode)
- the canonical records produced from it (CanonicalRecord / CanonicalValue)
- the transport interface every client implements
- request option sets and service operation names

Both the SOAP client and the recorded client produce the same RawNode shape,
so everything above the transport is independent of where data came from.
"""

from .interfaces import CanonicalRecord, CanonicalValue, CatalogTransport, RawNode
from .search import ArticleSearchOptions, NumberType, SortType

__all__ = [
    "CanonicalRecord",
    "CanonicalValue",
    "CatalogTransport",
    "RawNode",
    "ArticleSearchOptions",
    "NumberType",
    "SortType",
]
