from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List

from tecdoc.coercion import first_text, to_int, to_str
from tecdoc.contracts import operations
from tecdoc.contracts.interfaces import CanonicalRecord
from tecdoc.contracts.search import ArticleSearchOptions
from tecdoc.entities.base import CatalogEntity, memoized
from tecdoc.entities.brand import Brand
from tecdoc.entities.documents import ArticleDocument, ArticleThumbnail
from tecdoc.entities.vehicle import Vehicle, VehicleManufacturer

if TYPE_CHECKING:
    from tecdoc.catalog import Catalog

logger = logging.getLogger(__name__)

LINK_ALL_TARGETS = -1


@dataclass
class ArticleAttribute:
    id: int = 0
    name: str = ""
    short_name: str = ""
    value: str = ""
    unit: str = ""
    type: str = ""

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "ArticleAttribute":
        return cls(
            id=to_int(record.get("attr_id")),
            name=to_str(record.get("attr_name")),
            short_name=to_str(record.get("attr_short_name")),
            value=to_str(record.get("attr_value")),
            unit=to_str(record.get("attr_unit")),
            type=to_str(record.get("attr_type")),
        )


@dataclass
class ArticleOENumber:
    """An original-equipment (vehicle manufacturer) number an article replaces."""

    brand_name: str = ""
    oe_number: str = ""

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "ArticleOENumber":
        return cls(brand_name=to_str(record.get("brand_name")), oe_number=to_str(record.get("oe_number")))


@dataclass
class Article(CatalogEntity):
    id: int = 0
    name: str = ""
    number: str = ""
    search_number: str = ""
    brand_name: str = ""
    brand_number: int = 0
    generic_article_id: int = 0
    number_type: int = 0

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "Article":
        return cls(
            id=to_int(record.get("article_id")),
            name=to_str(record.get("article_name")),
            number=to_str(record.get("article_no")),
            search_number=to_str(record.get("article_search_no")),
            brand_name=to_str(record.get("brand_name")),
            brand_number=to_int(record.get("brand_no")),
            generic_article_id=to_int(record.get("generic_article_id")),
            number_type=to_int(record.get("number_type")),
        )

    @classmethod
    def search(cls, catalog: "Catalog", **options: Any) -> List["Article"]:
        """Find articles by any number type, optionally filtered by brand and generic article.

        Accepts the fields of ``ArticleSearchOptions``: ``article_number``,
        ``brand_no``, ``country``, ``generic_article_id``, ``lang``,
        ``number_type`` (0 article, 1 OE, 2 trade, 3 comparable, 4 replacement,
        5 replaced, 6 EAN, 10 any), ``search_exact`` and ``sort_type``
        (1 brand, 2 product group).
        """
        search = ArticleSearchOptions(**options)
        params = search.to_params()
        scope = catalog.scope(lang=search.lang, country=search.country)
        params.update(scope)
        records = catalog.request(operations.ARTICLE_SEARCH, params)
        return [cls.from_record(record).bind(catalog, scope) for record in records]

    @memoized
    def brand(self) -> Brand:
        return Brand(number=self.brand_number, name=self.brand_name)

    @memoized
    def documents(self) -> List[ArticleDocument]:
        return ArticleDocument.all(self._require_catalog(), article_id=self.id, lang=self.lang, country=self.country)

    @memoized
    def thumbnails(self) -> List[ArticleThumbnail]:
        return ArticleThumbnail.all(self._require_catalog(), article_id=self.id)

    @memoized
    def attributes(self) -> List[ArticleAttribute]:
        return [ArticleAttribute.from_record(r) for r in self.assigned_article.records("article_attributes")]

    @memoized
    def ean_number(self) -> str:
        return first_text(self.assigned_article.records("ean_number"))

    @memoized
    def oe_numbers(self) -> List[ArticleOENumber]:
        return [ArticleOENumber.from_record(r) for r in self.assigned_article.records("oen_numbers")]

    @memoized
    def linked_manufacturers(self) -> List[VehicleManufacturer]:
        records = self.request(operations.ARTICLE_LINKED_MANUFACTURERS, {
            "country": self.country,
            "linking_target_type": operations.PASSENGER_CAR,
            "article_id": self.id,
        })
        return [VehicleManufacturer.from_record(r).bind(self.catalog, self.scope) for r in records]

    @memoized
    def linked_vehicle_ids(self) -> List[int]:
        """Ids of passenger cars the article is linked to, first occurrence order."""
        records = self.request(operations.ARTICLE_LINKED_TARGETS, {
            "lang": self.lang,
            "country": self.country,
            "linking_target_type": operations.PASSENGER_CAR,
            "linking_target_id": LINK_ALL_TARGETS,
            "article_id": self.id,
        })
        return list(dict.fromkeys(to_int(r.get("linking_target_id")) for r in records))

    @memoized
    def linked_vehicles(self) -> List[Vehicle]:
        return Vehicle.find_by_ids(self._require_catalog(), self.linked_vehicle_ids, lang=self.lang, country=self.country)

    @memoized
    def assigned_article(self) -> CanonicalRecord:
        """Detail record carrying attributes, EAN and OE numbers."""
        records = self.request(operations.ASSIGNED_ARTICLE, {
            "lang": self.lang,
            "country": self.country,
            "linking_target_type": operations.UNIVERSAL,
            "article_id": self.id,
            "attributs": True,
            "ean_numbers": True,
            "oe_numbers": True,
        })
        if not records:
            logger.warning("No assigned article returned for article %s", self.id)
            return CanonicalRecord()
        return records[0]
