"""
Catalog entities.

Typed objects built from canonical records. Eager fields are coerced at
construction; derived data (documents, linked vehicles, OE numbers, ...) is
fetched on first access and memoized per instance.
"""

from .article import Article, ArticleAttribute, ArticleOENumber
from .base import CatalogEntity, memoized
from .brand import Brand
from .documents import ArticleDocument, ArticleThumbnail
from .language import Language
from .vehicle import Vehicle, VehicleManufacturer, VehicleModel

__all__ = [
    "Article", "ArticleAttribute", "ArticleOENumber",
    "ArticleDocument", "ArticleThumbnail",
    "Brand", "CatalogEntity", "Language", "memoized",
    "Vehicle", "VehicleManufacturer", "VehicleModel",
]
