"""
Long id list batching.

The service accepts a limited number of ids per call. ``BatchedIdRequester``
splits an id list into consecutive chunks, issues one request per chunk in
order and concatenates the chunk results, keeping chunk order and the order
each chunk came back in. Results are neither deduplicated nor re-sorted.

The first failing chunk abandons the batch (``BatchFailure``); later chunks are
never sent and no partial result is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, List, Mapping, Optional, TypeVar

from tecdoc.contracts.interfaces import CanonicalRecord
from tecdoc.contracts.operations import MAX_IDS_PER_CALL
from tecdoc.errors import BatchFailure, RequestFailed
from tecdoc.executor import RequestExecutor

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition(ids: Iterable[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive chunks of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"batch size must be at least 1, got {size}")
    items = list(ids)
    for start in range(0, len(items), size):
        yield items[start:start + size]


class BatchedIdRequester:
    def __init__(self, executor: RequestExecutor, max_batch_size: int = MAX_IDS_PER_CALL) -> None:
        if max_batch_size < 1:
            raise ValueError(f"max_batch_size must be at least 1, got {max_batch_size}")
        self.executor = executor
        self.max_batch_size = max_batch_size

    def fetch_by_ids(
        self,
        operation: str,
        ids: Iterable[Any],
        template: Mapping[str, Any],
        id_field: str,
        max_batch_size: Optional[int] = None,
    ) -> List[CanonicalRecord]:
        """Fetch records for ``ids``, ``max_batch_size`` ids per request.

        Each request sends ``template`` with ``id_field`` set to the chunk.
        """
        ids = list(ids)
        size = self.max_batch_size if max_batch_size is None else max_batch_size
        chunks = list(partition(ids, size))
        if not chunks:
            return []

        logger.debug("%s: fetching %d id(s) in %d chunk(s)", operation, len(ids), len(chunks))
        results: List[CanonicalRecord] = []
        for index, chunk in enumerate(chunks):
            params = dict(template)
            params[id_field] = chunk
            try:
                results.extend(self.executor.execute(operation, params))
            except RequestFailed as exc:
                logger.error("%s: chunk %d of %d failed, abandoning batch", operation, index, len(chunks))
                raise BatchFailure(operation, index, len(chunks), chunk, exc) from exc
        return results
