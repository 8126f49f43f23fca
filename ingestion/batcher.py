"""
Fixed-size, order-preserving batching of documents
"""

from typing import Iterable, Iterator, List, Optional
from schemas.location import LocationDocument

Batch = List[LocationDocument]


class Batcher:
    """Ordered buffer that hands out a batch every `flush_threshold` documents."""

    def __init__(self, flush_threshold: int = 1000):
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be at least 1")
        self.flush_threshold = flush_threshold
        self._buffer: Batch = []

    def __len__(self) -> int:
        return len(self._buffer)

    def add(self, document: LocationDocument) -> Optional[Batch]:
        """Buffer a document; return the completed batch once full."""
        self._buffer.append(document)
        if len(self._buffer) >= self.flush_threshold:
            return self._take()
        return None

    def flush(self) -> Optional[Batch]:
        """Return the remaining partial batch, if any."""
        if not self._buffer:
            return None
        return self._take()

    def _take(self) -> Batch:
        batch, self._buffer = self._buffer, []
        return batch


def iter_batches(documents: Iterable[LocationDocument], size: int) -> Iterator[Batch]:
    """Group documents into batches of `size`, the last one possibly smaller."""
    batcher = Batcher(size)
    for document in documents:
        batch = batcher.add(document)
        if batch is not None:
            yield batch
    tail = batcher.flush()
    if tail is not None:
        yield tail
