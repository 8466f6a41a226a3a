"""
Catalog session.

A ``Catalog`` bundles everything needed to talk to the service: the transport,
the provider id merged into every request, the default scope (lang/country)
and the request executor / id batcher built on top of the transport. It is
constructed explicitly and handed to entities; there is no global client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tecdoc.batching import BatchedIdRequester
from tecdoc.clients.real_http.soap import SoapTransport
from tecdoc.contracts.interfaces import CanonicalRecord, CatalogTransport
from tecdoc.contracts.operations import MAX_IDS_PER_CALL
from tecdoc.entities import Article, Brand, Language, Vehicle, VehicleManufacturer
from tecdoc.executor import RequestExecutor
from tecdoc.utils.config_loader import CatalogConfig, load_catalog_config

logger = logging.getLogger(__name__)


class Catalog:
    def __init__(
        self,
        transport: CatalogTransport,
        provider: int,
        lang: str = "en",
        country: str = "de",
        max_batch_size: int = MAX_IDS_PER_CALL,
    ) -> None:
        self.transport = transport
        self.provider = provider
        self.default_scope: Dict[str, str] = {"lang": lang, "country": country}
        self.executor = RequestExecutor(transport, session_params={"provider": provider})
        self.batcher = BatchedIdRequester(self.executor, max_batch_size=max_batch_size)

    @classmethod
    def from_config(
        cls,
        config: Optional[CatalogConfig] = None,
        transport: Optional[CatalogTransport] = None,
    ) -> "Catalog":
        """Build a catalog from configuration.

        Without an explicit ``transport`` a SOAP transport is created from
        ``config.transport``.
        """
        config = config or load_catalog_config()
        if transport is None:
            transport = SoapTransport(
                endpoint=config.transport.endpoint,
                timeout_seconds=config.transport.timeout_seconds,
                proxy=config.transport.proxy,
            )
        logger.info(f"Catalog ready: provider={config.provider} transport={type(transport).__name__}")
        return cls(
            transport,
            provider=config.provider,
            lang=config.lang,
            country=config.country,
            max_batch_size=config.max_batch_size,
        )

    # -- scope ---------------------------------------------------------------

    def scope(self, lang: Optional[str] = None, country: Optional[str] = None) -> Dict[str, str]:
        """Return a scope with unset values taken from the catalog defaults."""
        return {
            "lang": lang or self.default_scope["lang"],
            "country": country or self.default_scope["country"],
        }

    # -- requests ------------------------------------------------------------

    def request(self, operation: str, params: Optional[Mapping[str, Any]] = None) -> List[CanonicalRecord]:
        return self.executor.execute(operation, params)

    def fetch_by_ids(
        self,
        operation: str,
        ids: Sequence[Any],
        template: Mapping[str, Any],
        id_field: str,
        max_batch_size: Optional[int] = None,
    ) -> List[CanonicalRecord]:
        return self.batcher.fetch_by_ids(operation, ids, template, id_field, max_batch_size)

    # -- entry points --------------------------------------------------------

    def search_articles(self, **options: Any) -> List[Article]:
        return Article.search(self, **options)

    def languages(self, lang: Optional[str] = None) -> List[Language]:
        return Language.all(self, lang=lang)

    def brands(self, lang: Optional[str] = None, country: Optional[str] = None) -> List[Brand]:
        return Brand.all(self, lang=lang, country=country)

    def manufacturers(self, **options: Any) -> List[VehicleManufacturer]:
        return VehicleManufacturer.all(self, **options)

    def vehicles(self, ids: Sequence[Any], lang: Optional[str] = None, country: Optional[str] = None) -> List[Vehicle]:
        return Vehicle.find_by_ids(self, ids, lang=lang, country=country)

    # -- lifecycle -----------------------------------------------------------

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Catalog":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
