from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from tecdoc.coercion import to_int, to_str
from tecdoc.contracts import operations
from tecdoc.contracts.interfaces import CanonicalRecord
from tecdoc.entities.base import CatalogEntity

if TYPE_CHECKING:
    from tecdoc.catalog import Catalog


@dataclass
class ArticleDocument(CatalogEntity):
    """A document (picture, drawing, manual) attached to an article."""

    id: int = 0
    file_name: str = ""
    file_type: str = ""
    type_id: int = 0
    type_name: str = ""
    description: str = ""

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "ArticleDocument":
        return cls(
            id=to_int(record.get("doc_id")),
            file_name=to_str(record.get("doc_file_name")),
            file_type=to_str(record.get("doc_file_type_name")),
            type_id=to_int(record.get("doc_type_id")),
            type_name=to_str(record.get("doc_type_name")),
            description=to_str(record.get("description")),
        )

    @classmethod
    def all(
        cls,
        catalog: "Catalog",
        article_id: int,
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List["ArticleDocument"]:
        scope = catalog.scope(lang=lang, country=country)
        records = catalog.request(operations.ARTICLE_DOCUMENTS, {
            "lang": scope["lang"],
            "country": scope["country"],
            "article_id": article_id,
        })
        return [cls.from_record(record).bind(catalog, scope) for record in records]


@dataclass
class ArticleThumbnail(CatalogEntity):
    id: int = 0
    file_name: str = ""
    type: int = 0

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "ArticleThumbnail":
        return cls(
            id=to_int(record.get("thumb_doc_id")),
            file_name=to_str(record.get("thumb_file_name")),
            type=to_int(record.get("thumb_type")),
        )

    @classmethod
    def all(cls, catalog: "Catalog", article_id: int) -> List["ArticleThumbnail"]:
        records = catalog.request(operations.ARTICLE_THUMBNAILS, {"article_id": article_id})
        return [cls.from_record(record).bind(catalog) for record in records]
