"""
Real SOAP HTTP Client.

Purpose:
- Posts SOAP envelopes to the catalog web service
- Turns the response envelope into the RawNode wrapper the executor expects

Usage:
- Built by Catalog.from_config(...) from the transport configuration
- Called by RequestExecutor through the CatalogTransport interface

Important:
- This client is the ONLY place where catalog HTTP calls are made.
- Network errors, HTTP errors, SOAP faults and non-200 service statuses all
  surface as TransportFailure; nothing is retried here.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

import httpx

from tecdoc.clients.envelope import build_envelope, fault_from_content, parse_envelope
from tecdoc.contracts.interfaces import CatalogTransport, RawNode
from tecdoc.errors import TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://webservicepilot.tecdoc.net/pegasus-2-0/services/TecdocToCatWL"


class SoapTransport(CatalogTransport):
    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout_seconds: float = 30.0,
        proxy: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.endpoint = endpoint or os.getenv("TECDOC_ENDPOINT", DEFAULT_ENDPOINT)
        self.timeout_seconds = timeout_seconds
        self.headers: Dict[str, str] = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": '""',
        }
        self.headers.update(headers or {})

        client_kwargs: Dict[str, Any] = {"timeout": timeout_seconds}
        if proxy:
            client_kwargs["proxy"] = proxy
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    def call(self, operation: str, body: Mapping[str, Any]) -> RawNode:
        payload = build_envelope(operation, body)
        logger.info(f"Calling catalog operation {operation}")

        try:
            response = self._client.post(self.endpoint, content=payload, headers=self.headers)
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to catalog service: {e}")
            raise TransportFailure(operation, e) from e

        if response.is_error:
            reason = self._fault_or_reason(response)
            logger.error(f"HTTP error from catalog service: {response.status_code} {reason}")
            raise TransportFailure(operation, f"HTTP {response.status_code}: {reason}")

        logger.debug(f"Received {operation} response: status={response.status_code} bytes={len(response.content)}")
        return parse_envelope(response.content, operation)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SoapTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _fault_or_reason(response: httpx.Response) -> str:
        # Faults arrive with HTTP 500; prefer the faultstring over the status phrase.
        return fault_from_content(response.content) or response.reason_phrase
