"""
Command-line entrypoint: wire settings into a runner and map errors to exit codes
"""

import argparse
import asyncio
import logging
from typing import Any, Dict, Optional, Sequence

from core.config import Settings, get_settings
from core.database import create_store_engine
from core.exceptions import IngestionCancelled, IngestionError
from core.logging import setup_logging
from ingestion.cancellation import CancellationToken
from ingestion.checkpoint import FileCheckpointStore, checkpoint_path_for
from ingestion.extractors.csv_extractor import CSVRecordSource
from ingestion.loaders.document_loader import DocumentLoader
from ingestion.progress import ProgressReporter
from ingestion.runner import BatchLoader, IngestionRunner
from ingestion.transformers.location_mapper import LocationMapper

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def checkpoint_store_for(settings: Settings) -> FileCheckpointStore:
    path = settings.CHECKPOINT_FILE or checkpoint_path_for(settings.csv_path, settings.CHECKPOINT_SUFFIX)
    return FileCheckpointStore(path)


def build_runner(
    settings: Settings,
    loader: BatchLoader,
    cancel_token: Optional[CancellationToken] = None
) -> IngestionRunner:
    """Assemble the pipeline from settings."""
    return IngestionRunner(
        source=CSVRecordSource(settings.csv_path, chunk_size=settings.READ_CHUNK_SIZE),
        loader=loader,
        checkpoint_store=checkpoint_store_for(settings),
        mapper=LocationMapper(region=settings.REGION_FILTER),
        batch_size=settings.ETL_BATCH_SIZE,
        cancel_token=cancel_token,
        progress=ProgressReporter(report_interval=settings.PROGRESS_INTERVAL),
        strict_checkpoint=settings.STRICT_CHECKPOINT,
    )


async def run_ingestion(
    settings: Settings,
    reset_checkpoint: bool = False,
    cancel_token: Optional[CancellationToken] = None
) -> Dict[str, Any]:
    """Run one ingestion against the configured store."""
    cancel_token = cancel_token or CancellationToken()

    if reset_checkpoint:
        checkpoint_store_for(settings).clear()

    engine = create_store_engine(settings.DATABASE_URL, settings.DB_NAME)
    cancel_token.install_signal_handlers()
    try:
        loader = DocumentLoader(
            engine,
            settings.COLLECTION_NAME,
            skip_duplicates=settings.SKIP_DUPLICATES
        )
        await loader.ensure_collection()
        runner = build_runner(settings, loader, cancel_token)
        return await runner.run()
    finally:
        cancel_token.remove_signal_handlers()
        await engine.dispose()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest a places CSV file into the document store")
    parser.add_argument(
        "--reset-checkpoint",
        action="store_true",
        help="Delete the checkpoint and ingest from the first row"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = get_settings()
    except IngestionError as e:
        setup_logging()
        logger.error(f"Configuration error: {e.message}", extra={"error_context": e.to_dict()})
        return EXIT_FAILURE

    setup_logging(settings.LOG_LEVEL)

    try:
        asyncio.run(run_ingestion(settings, reset_checkpoint=args.reset_checkpoint))
    except IngestionCancelled as e:
        print(f"\nInterrupt received, stopped at checkpoint {e.context.get('checkpoint_value')}")
        return EXIT_INTERRUPTED
    except KeyboardInterrupt:
        print("\nInterrupt received, stopping...")
        return EXIT_INTERRUPTED
    except IngestionError as e:
        logger.error(
            f"Error processing CSV: {e}",
            extra={"error_context": e.to_dict()},
            exc_info=e.original_exception
        )
        return EXIT_FAILURE
    except Exception:
        logger.exception("Error processing CSV")
        return EXIT_FAILURE

    print("CSV data inserted successfully!")
    return EXIT_OK
