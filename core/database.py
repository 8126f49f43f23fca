"""
Async engine construction for the document store
"""

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from core.exceptions import ConfigurationError
import logging

logger = logging.getLogger(__name__)


def build_store_url(database_url: str, db_name: str):
    """Return the connection URL with its database replaced by `db_name`."""
    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise ConfigurationError(
            "DATABASE_URL is not a valid connection string",
            context={"fields": ["DATABASE_URL"]},
            original_exception=e,
        )
    return url.set(database=db_name)


def create_store_engine(database_url: str, db_name: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine used by the loader."""
    url = build_store_url(database_url, db_name)
    logger.info(f"Connecting to {url.render_as_string(hide_password=True)}")
    return create_async_engine(
        url,
        echo=echo,
        poolclass=NullPool,  # single committer, one connection per batch
        future=True,
    )
