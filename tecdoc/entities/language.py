from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from tecdoc.coercion import to_str
from tecdoc.contracts import operations
from tecdoc.contracts.interfaces import CanonicalRecord
from tecdoc.entities.base import CatalogEntity

if TYPE_CHECKING:
    from tecdoc.catalog import Catalog


@dataclass
class Language(CatalogEntity):
    code: str = ""
    name: str = ""

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "Language":
        return cls(code=to_str(record.get("language_code")), name=to_str(record.get("language_name")))

    @classmethod
    def all(cls, catalog: "Catalog", lang: Optional[str] = None) -> List["Language"]:
        """Languages the service can answer in, with names in ``lang``."""
        scope = catalog.scope(lang=lang)
        records = catalog.request(operations.LANGUAGES, {"lang": scope["lang"]})
        return [cls.from_record(record).bind(catalog, scope) for record in records]
