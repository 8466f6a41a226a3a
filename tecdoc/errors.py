"""Error types raised by the catalog access layer.

Every hard failure is a ``CatalogError``. Nothing in the package retries;
errors propagate to the original caller with enough context (operation
name, chunk index, node path) to tell what failed.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple


class CatalogError(Exception):
    """Base class for catalog access errors."""


class RequestFailed(CatalogError):
    def __init__(self, operation: Optional[str], cause: Any, message: Optional[str] = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(message or f"{operation or '<unknown operation>'} failed: {cause}")


class TransportFailure(RequestFailed):
    """The transport could not complete the remote call (network, HTTP, SOAP fault)."""


class UnexpectedShape(RequestFailed):
    """A response tree did not have the wrapper/record shape expected at that point."""

    def __init__(
        self,
        description: str,
        *,
        operation: Optional[str] = None,
        path: Sequence[str] = (),
    ) -> None:
        self.description = description
        self.path: Tuple[str, ...] = tuple(path)
        where = "/".join(self.path) or "<root>"
        prefix = f"{operation}: " if operation else ""
        super().__init__(operation, description, message=f"{prefix}unexpected response shape at {where}: {description}")

    def for_operation(self, operation: str) -> "UnexpectedShape":
        return UnexpectedShape(self.description, operation=operation, path=self.path)


class BatchFailure(RequestFailed):
    """A chunk of a batched id request failed; the batch was abandoned.

    ``chunk_index`` is 0-based.
    """

    def __init__(
        self,
        operation: str,
        chunk_index: int,
        chunk_count: int,
        ids: Sequence[Any],
        cause: BaseException,
    ) -> None:
        self.chunk_index = chunk_index
        self.chunk_count = chunk_count
        self.ids = list(ids)
        super().__init__(
            operation,
            cause,
            message=f"{operation}: chunk index {chunk_index} of {chunk_count} chunks ({len(self.ids)} ids) failed: {cause}",
        )
