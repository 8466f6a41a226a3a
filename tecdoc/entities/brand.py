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
class Brand(CatalogEntity):
    """An article brand (supplier)."""

    number: int = 0
    name: str = ""

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "Brand":
        return cls(number=to_int(record.get("brand_no")), name=to_str(record.get("brand_name")))

    @classmethod
    def all(cls, catalog: "Catalog", lang: Optional[str] = None, country: Optional[str] = None) -> List["Brand"]:
        scope = catalog.scope(lang=lang, country=country)
        records = catalog.request(operations.BRANDS, {
            "lang": scope["lang"],
            "article_country": scope["country"],
        })
        return [cls.from_record(record).bind(catalog, scope) for record in records]
