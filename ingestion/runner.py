# ============================================================================
# File: ingestion/runner.py
# Description: Resumable, checkpointed batch ingestion of a CSV file
# ============================================================================
"""
Ingestion Runner - streams a CSV file into the document store.

Pipeline:
    CSVRecordSource -> ResumeFilter -> LocationMapper -> Batcher
    -> DocumentLoader.insert_batch -> FileCheckpointStore.write

Guarantees:
- Rows are committed in file order, batch by batch
- The checkpoint only moves after a batch is committed (at-least-once)
- A failed batch aborts the run with the checkpoint left on the previous batch
- Cancellation is honoured between batches and during long scans, never mid-commit
"""

from typing import Any, Dict, List, Optional, Protocol
import asyncio
import logging

from core.exceptions import (
    IngestionError,
    StaleCheckpointError,
)
from ingestion.batcher import Batch, Batcher
from ingestion.cancellation import CancellationToken
from ingestion.checkpoint import FileCheckpointStore
from ingestion.extractors.csv_extractor import CSVRecordSource
from ingestion.progress import ProgressReporter
from ingestion.resume import ResumeFilter
from ingestion.transformers.location_mapper import LocationMapper
from models.base import RunStatus
from schemas.location import LocationDocument

logger = logging.getLogger(__name__)

# rows between event-loop yields while scanning
YIELD_INTERVAL = 1000


class BatchLoader(Protocol):
    async def insert_batch(self, batch: List[LocationDocument]) -> int: ...


class IngestionRunner:
    """
    Orchestrates one ingestion run.

    Responsibilities:
    - Read the checkpoint once at startup
    - Skip rows already committed by earlier runs
    - Map, batch and bulk-insert the remaining rows
    - Advance the checkpoint after every committed batch
    - Surface a checkpoint that never matched the input
    """

    def __init__(
        self,
        source: CSVRecordSource,
        loader: BatchLoader,
        checkpoint_store: FileCheckpointStore,
        mapper: Optional[LocationMapper] = None,
        batch_size: int = 1000,
        cancel_token: Optional[CancellationToken] = None,
        progress: Optional[ProgressReporter] = None,
        strict_checkpoint: bool = False
    ):
        self.source = source
        self.loader = loader
        self.checkpoint_store = checkpoint_store
        self.mapper = mapper or LocationMapper()
        self.batch_size = batch_size
        self.cancel_token = cancel_token or CancellationToken()
        self.progress = progress or ProgressReporter()
        self.strict_checkpoint = strict_checkpoint

        self.checkpoint_value: Optional[str] = None
        self.records_filtered = 0
        self.records_loaded = 0
        self.batches_committed = 0

    async def run(self) -> Dict[str, Any]:
        """
        Run the pipeline to the end of the input.

        Returns:
            Dictionary with run statistics:
            - status: RunStatus value
            - records_read: Rows read from the file
            - records_resumed_past: Rows skipped because a previous run committed them
            - records_filtered: Rows rejected by the region predicate
            - records_loaded: Documents written (duplicates skipped are not counted)
            - batches_committed: Number of committed batches
            - checkpoint: Key of the last committed document

        Raises:
            ExtractionError: Unreadable or malformed input
            TransformationError: Row does not match the column layout
            SinkError: Bulk insert failed; checkpoint stays on the previous batch
            StaleCheckpointError: Checkpoint not in input (strict mode)
            IngestionCancelled: Interrupt received; checkpoint reflects the last committed batch
        """
        try:
            self.checkpoint_value = self.checkpoint_store.read()
            resume = ResumeFilter(self.checkpoint_value)
            batcher = Batcher(self.batch_size)

            logger.info(
                f"Starting ingestion of {self.source.file_path} "
                f"(checkpoint: {self.checkpoint_value or 'none'}, batch size: {self.batch_size})"
            )

            for record in self.source.iter_records():
                if self.source.records_read % YIELD_INTERVAL == 0:
                    # let the loop run signal callbacks during long scans
                    await asyncio.sleep(0)
                    self.cancel_token.raise_if_cancelled(checkpoint_value=self.checkpoint_value)

                if not resume.admit(record):
                    continue

                document = self.mapper.map(record)
                self.progress.update()
                if document is None:
                    self.records_filtered += 1
                    continue

                batch = batcher.add(document)
                if batch is not None:
                    await self._commit(batch)

            tail = batcher.flush()
            if tail is not None:
                await self._commit(tail)

            status = RunStatus.SUCCESS
            if not resume.checkpoint_found:
                status = self._handle_stale_checkpoint()

            self.progress.finish()

            result = {
                "status": status.value,
                "records_read": self.source.records_read,
                "records_resumed_past": resume.records_skipped,
                "records_filtered": self.records_filtered,
                "records_loaded": self.records_loaded,
                "batches_committed": self.batches_committed,
                "checkpoint": self.checkpoint_value,
            }

            logger.info(
                f"Ingestion completed: {result['status']} - "
                f"Read: {result['records_read']}, Loaded: {self.records_loaded}, "
                f"Filtered: {self.records_filtered}, Batches: {self.batches_committed}"
            )
            return result

        except IngestionError:
            # logged once by the caller
            raise

        except Exception as e:
            raise IngestionError(
                "Unexpected error in ingestion pipeline",
                context={
                    "file_path": str(self.source.file_path),
                    "records_loaded": self.records_loaded,
                    "checkpoint_value": self.checkpoint_value
                },
                original_exception=e
            )

    async def _commit(self, batch: Batch) -> None:
        """Insert one batch, then advance the checkpoint to its last key."""
        self.cancel_token.raise_if_cancelled(checkpoint_value=self.checkpoint_value)
        inserted = await self.loader.insert_batch(batch)

        last_key = batch[-1].place_id
        self.checkpoint_value = last_key
        self.checkpoint_store.write(last_key)

        self.batches_committed += 1
        self.records_loaded += inserted
        self.progress.record_commit(len(batch))
        logger.debug(f"Batch {self.batches_committed}: {len(batch)} documents, checkpoint {last_key}")

    def _handle_stale_checkpoint(self) -> RunStatus:
        context = {
            "checkpoint_value": self.checkpoint_value,
            "file_path": str(self.source.file_path),
            "checkpoint_path": str(self.checkpoint_store.path),
        }
        if self.strict_checkpoint:
            raise StaleCheckpointError(
                "Checkpoint key not found in input; nothing was ingested",
                context=context
            )
        logger.warning(
            f"Checkpoint {self.checkpoint_value!r} was not found in {self.source.file_path}; "
            f"no records were ingested. Clear {self.checkpoint_store.path} to ingest from the start.",
            extra={"error_context": context}
        )
        return RunStatus.STALE_CHECKPOINT
