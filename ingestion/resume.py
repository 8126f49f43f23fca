"""
Resume filter: skip rows up to and including the checkpointed key
"""

from typing import Callable, Iterable, Iterator, Optional
from ingestion.extractors.csv_extractor import RawRecord
import logging

logger = logging.getLogger(__name__)


def place_id_of(record: RawRecord) -> str:
    """Natural key of a raw row (first column), normalised like the stored key"""
    return record[0].strip() if record else ""


class ResumeFilter:
    """
    Suppress rows that were committed by a previous run.

    The checkpoint holds the key of the last committed row. Every row up to
    and including that key is dropped; everything after it is passed through
    unchanged and in order. With no checkpoint, every row passes.

    After the stream is exhausted, `checkpoint_found` tells whether the key
    was ever seen. A key that never appears means the whole input was
    suppressed (stale checkpoint).
    """

    def __init__(
        self,
        last_processed_key: Optional[str],
        key_fn: Callable[[RawRecord], str] = place_id_of
    ):
        self.last_processed_key = (last_processed_key or "").strip()
        self.key_fn = key_fn
        self.resuming = not self.last_processed_key
        self.records_skipped = 0

    @property
    def checkpoint_found(self) -> bool:
        return self.resuming

    def admit(self, record: RawRecord) -> bool:
        """True when the row comes after the checkpoint and must be processed."""
        if self.resuming:
            return True

        self.records_skipped += 1
        if self.key_fn(record) == self.last_processed_key:
            self.resuming = True
            logger.info(
                f"Resuming after {self.last_processed_key} "
                f"({self.records_skipped} records already processed)"
            )
        return False

    def filter(self, records: Iterable[RawRecord]) -> Iterator[RawRecord]:
        for record in records:
            if self.admit(record):
                yield record
