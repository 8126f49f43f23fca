"""
Core utilities and configuration for the place ingestion pipeline.

Modules:
    config: Settings loaded from the environment and an optional .env file
    database: Async engine construction for the document store
    exceptions: Exception hierarchy mapped onto exit codes
    logging: Logging configuration

Usage:
    from core.config import get_settings
    from core.database import create_store_engine
    from core.exceptions import MalformedInputError, SinkError
    from core.logging import setup_logging

Example:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    engine = create_store_engine(settings.DATABASE_URL, settings.DB_NAME)
"""

__all__ = [
    "get_settings",
    "create_store_engine",
    "setup_logging",
    # Exceptions
    "IngestionError",
    "ConfigurationError",
    "ExtractionError",
    "SourceReadError",
    "MalformedInputError",
    "TransformationError",
    "SchemaMismatchError",
    "LoadError",
    "SinkError",
    "CheckpointError",
    "StaleCheckpointError",
    "IngestionCancelled",
]
