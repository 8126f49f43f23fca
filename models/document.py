from sqlalchemy import Table, Column, String, DateTime, MetaData, func
from sqlalchemy.dialects.postgresql import JSONB
from typing import Optional
from models.base import metadata as default_metadata
from schemas.location import MAX_PLACE_ID_LENGTH


def document_table(collection_name: str, metadata: Optional[MetaData] = None) -> Table:
    """
    Document collection backed by a PostgreSQL table.

    Design:
    - One row per place, keyed by the natural key (place_id)
    - The full document lives in a JSONB column
    - The table name is the configured collection name, so it is built at runtime

    Reuses the table if it was already declared on the same metadata.
    """
    metadata = metadata if metadata is not None else default_metadata
    existing = metadata.tables.get(collection_name)
    if existing is not None:
        return existing

    return Table(
        collection_name,
        metadata,
        Column("place_id", String(MAX_PLACE_ID_LENGTH), primary_key=True),
        Column("document", JSONB, nullable=False),
        Column("ingested_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    )
