"""
SQLAlchemy table definitions for the document store.

Models:
    base: Shared MetaData and enums (RunStatus)
    document: Collection table factory (place_id primary key + JSONB document)

Database Schema:
    Each collection is a PostgreSQL table whose name comes from
    COLLECTION_NAME. Documents are stored whole in a JSONB column.

Usage:
    from models.document import document_table
    from models.base import RunStatus

Example:
    table = document_table("places")
    async with engine.begin() as conn:
        await conn.run_sync(table.create, checkfirst=True)
"""

__all__ = [
    "metadata",
    "RunStatus",
    "document_table",
]
