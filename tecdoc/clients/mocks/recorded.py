"""Recorded catalog transport.

Replays stored responses instead of calling the service. Responses are keyed
by operation name and may be given as a RawNode, a SOAP envelope (``str`` /
``bytes``), a path to an envelope file, an exception to raise, or a callable
receiving the request body and returning any of those.

Every call is kept in ``calls`` and, when ``output_root`` is set, persisted as
JSON under ``<output_root>/<operation>/`` so request payloads can be inspected.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union
from uuid import uuid4

from tecdoc.clients.envelope import parse_envelope
from tecdoc.contracts.interfaces import CatalogTransport, RawNode
from tecdoc.errors import TransportFailure

logger = logging.getLogger(__name__)

Recorded = Union[RawNode, str, bytes, Path, BaseException, Callable[[Dict[str, Any]], Any]]


class RecordedTransport(CatalogTransport):
    """Mock transport that serves recorded responses per operation."""

    def __init__(
        self,
        responses: Optional[Mapping[str, Recorded]] = None,
        output_root: Optional[Path] = None,
    ) -> None:
        self.responses: Dict[str, Recorded] = dict(responses or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.output_root = output_root
        if self.output_root is not None:
            self.output_root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_directory(cls, directory: Path, output_root: Optional[Path] = None) -> "RecordedTransport":
        """Serve ``<operation>.xml`` envelopes found in ``directory``."""
        responses: Dict[str, Recorded] = {path.stem: path for path in sorted(directory.glob("*.xml"))}
        logger.debug("Loaded %d recorded operation(s) from %s", len(responses), directory)
        return cls(responses, output_root=output_root)

    def call(self, operation: str, body: Mapping[str, Any]) -> RawNode:
        request = dict(body)
        self.calls.append((operation, request))
        if self.output_root is not None:
            self._write_call(operation, request)

        if operation not in self.responses:
            raise TransportFailure(operation, "no recorded response for this operation")
        return self._resolve(operation, self.responses[operation], request)

    def calls_for(self, operation: str) -> List[Dict[str, Any]]:
        return [body for name, body in self.calls if name == operation]

    def _resolve(self, operation: str, recorded: Any, request: Dict[str, Any]) -> RawNode:
        if isinstance(recorded, BaseException):
            raise recorded
        if isinstance(recorded, RawNode):
            return recorded
        if isinstance(recorded, Path):
            return parse_envelope(recorded.read_bytes(), operation)
        if isinstance(recorded, str):
            return parse_envelope(recorded.encode("utf-8"), operation)
        if isinstance(recorded, bytes):
            return parse_envelope(recorded, operation)
        if callable(recorded):
            return self._resolve(operation, recorded(request), request)
        raise TypeError(f"unsupported recorded response for {operation}: {type(recorded).__name__}")

    def _write_call(self, operation: str, request: Dict[str, Any]) -> Path:
        operation_dir = self.output_root / operation
        operation_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        file_path = operation_dir / f"{timestamp}_{uuid4().hex[:8]}.json"
        document = {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "operation": operation,
            "input": request,
        }
        file_path.write_text(json.dumps(document, indent=2, default=str), encoding="utf-8")
        return file_path
