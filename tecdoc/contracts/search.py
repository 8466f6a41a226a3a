"""
Article search contract.

Defines the option set accepted by the direct article search, validated
before anything is sent to the service.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class NumberType(IntEnum):
    ARTICLE = 0
    OE = 1
    TRADE = 2
    COMPARABLE = 3
    REPLACEMENT = 4
    REPLACED = 5
    EAN = 6
    ANY = 10


class SortType(IntEnum):
    BRAND = 1
    PRODUCT_GROUP = 2


class ArticleSearchOptions(BaseModel):
    """Options for ``Article.search``.

    ``article_number`` is simplified by the service before matching.
    ``lang`` and ``country`` fall back to the catalog scope when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    article_number: str = Field(min_length=1)
    brand_no: Optional[int] = None
    country: Optional[str] = None                # ISO 3166
    generic_article_id: Optional[int] = None
    lang: Optional[str] = None                   # ISO 639
    number_type: NumberType = NumberType.ANY
    search_exact: bool = False
    sort_type: SortType = SortType.BRAND

    def to_params(self) -> Dict[str, Any]:
        params = self.model_dump()
        params["number_type"] = int(self.number_type)
        params["sort_type"] = int(self.sort_type)
        return params
