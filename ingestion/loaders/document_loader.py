"""
Bulk-insert place documents into a PostgreSQL JSONB collection
"""

from typing import List
from sqlalchemy import Table
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from core.exceptions import SinkError
from models.document import document_table
from schemas.location import LocationDocument
import logging

logger = logging.getLogger(__name__)


class DocumentLoader:
    """
    Write batches of documents into one collection table.

    Ensures:
    - One INSERT statement per batch, inside one transaction
    - Re-inserting an already committed place_id is a no-op when
      `skip_duplicates` is set, so a retried batch does not fail
    """

    def __init__(
        self,
        engine: AsyncEngine,
        collection_name: str,
        skip_duplicates: bool = True
    ):
        self.engine = engine
        self.collection_name = collection_name
        self.skip_duplicates = skip_duplicates
        self.table: Table = document_table(collection_name)

    async def ensure_collection(self) -> None:
        """Create the collection table if it does not exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(self.table.create, checkfirst=True)
        except (SQLAlchemyError, OSError) as e:
            raise SinkError(
                "Failed to create collection",
                context={"collection": self.collection_name, "operation": "CREATE"},
                original_exception=e
            )

    async def insert_batch(self, batch: List[LocationDocument]) -> int:
        """
        Insert one batch.

        Returns:
            Number of rows actually written (duplicates skipped are not counted)

        Raises:
            SinkError: On any store failure; nothing in the batch is committed
        """
        if not batch:
            return 0

        rows = [
            {"place_id": doc.place_id, "document": doc.to_document()}
            for doc in batch
        ]
        stmt = insert(self.table).values(rows)
        if self.skip_duplicates:
            stmt = stmt.on_conflict_do_nothing(index_elements=["place_id"])

        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise SinkError(
                "Bulk insert failed",
                context={
                    "collection": self.collection_name,
                    "batch_size": len(batch),
                    "first_key": batch[0].place_id,
                    "last_key": batch[-1].place_id,
                    "operation": "INSERT"
                },
                original_exception=e
            )

        inserted = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else len(batch)
        if inserted < len(batch):
            logger.info(f"Skipped {len(batch) - inserted} documents already in {self.collection_name}")
        logger.debug(f"Inserted {inserted} documents into {self.collection_name}")
        return inserted
