"""
Single-operation request execution.

Sends one operation to the transport, merged with the session parameters the
service requires on every call (the provider id), and normalizes the returned
record wrapper into a list of canonical records.

One invocation is exactly one transport call: no retry, no caching.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from tecdoc.contracts.interfaces import CanonicalRecord, CatalogTransport
from tecdoc.errors import RequestFailed, UnexpectedShape
from tecdoc.normalizer import normalize_collection

logger = logging.getLogger(__name__)


class RequestExecutor:
    def __init__(self, transport: CatalogTransport, session_params: Optional[Mapping[str, Any]] = None) -> None:
        self.transport = transport
        self.session_params: Dict[str, Any] = dict(session_params or {})

    def execute(self, operation: str, params: Optional[Mapping[str, Any]] = None) -> List[CanonicalRecord]:
        body: Dict[str, Any] = {**self.session_params, **(params or {})}
        logger.debug("Calling %s with %s", operation, {k: v for k, v in body.items() if k != "provider"})

        try:
            node = self.transport.call(operation, body)
        except RequestFailed as exc:
            logger.error("Catalog request %s failed: %s", operation, exc)
            raise
        except Exception as exc:
            logger.error("Catalog request %s failed: %s", operation, exc)
            raise RequestFailed(operation, exc) from exc

        try:
            records = normalize_collection(node)
        except UnexpectedShape as exc:
            logger.error("Catalog request %s returned an unexpected shape: %s", operation, exc.description)
            raise exc.for_operation(operation) from exc
        except RecursionError as exc:
            logger.error("Catalog request %s returned a tree too deep to normalize", operation)
            raise UnexpectedShape("response tree is nested too deeply", operation=operation, path=(node.name,)) from exc

        logger.debug("%s returned %d record(s)", operation, len(records))
        return records
