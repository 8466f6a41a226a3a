"""
Client access layer for the TecDoc parts catalog web service.

This package contains all code used to query the catalog:
- transports that call the service (SOAP over HTTP) or replay recorded responses
- normalization of the service's nested response trees into canonical records
- request execution and batching of long id lists
- typed entities (articles, vehicles, manufacturers, documents) with lazily
  fetched, memoized derived data

Key rule:
- Entities and callers MUST NOT talk to a transport directly.
- Everything goes through a Catalog, which is constructed explicitly and
  passed around; there is no process-wide client.
"""

from .batching import BatchedIdRequester
from .catalog import Catalog
from .contracts import (
    ArticleSearchOptions,
    CanonicalRecord,
    CanonicalValue,
    CatalogTransport,
    NumberType,
    RawNode,
    SortType,
)
from .entities import (
    Article,
    ArticleAttribute,
    ArticleDocument,
    ArticleOENumber,
    ArticleThumbnail,
    Brand,
    Language,
    Vehicle,
    VehicleManufacturer,
    VehicleModel,
)
from .errors import BatchFailure, CatalogError, RequestFailed, TransportFailure, UnexpectedShape
from .executor import RequestExecutor
from .normalizer import normalize, normalize_collection

__version__ = "0.3.0"

__all__ = [
    # session
    "Catalog", "RequestExecutor", "BatchedIdRequester",
    # contracts
    "ArticleSearchOptions", "CanonicalRecord", "CanonicalValue",
    "CatalogTransport", "NumberType", "RawNode", "SortType",
    # normalization
    "normalize", "normalize_collection",
    # entities
    "Article", "ArticleAttribute", "ArticleDocument", "ArticleOENumber",
    "ArticleThumbnail", "Brand", "Language", "Vehicle",
    "VehicleManufacturer", "VehicleModel",
    # errors
    "BatchFailure", "CatalogError", "RequestFailed", "TransportFailure", "UnexpectedShape",
]
