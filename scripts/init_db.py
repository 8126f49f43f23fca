import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import get_settings
from core.database import create_store_engine
from core.exceptions import IngestionError
from core.logging import setup_logging
from ingestion.loaders.document_loader import DocumentLoader

logger = logging.getLogger(__name__)


async def init_database(settings):
    logger.info("Connecting to database...")
    engine = create_store_engine(settings.DATABASE_URL, settings.DB_NAME)
    try:
        loader = DocumentLoader(engine, settings.COLLECTION_NAME)
        logger.info(f"Creating collection {settings.COLLECTION_NAME}...")
        await loader.ensure_collection()
        logger.info("Collection ready.")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    try:
        settings = get_settings()
        setup_logging(settings.LOG_LEVEL)
        asyncio.run(init_database(settings))
    except IngestionError as e:
        setup_logging()
        logger.error(str(e))
        sys.exit(1)
