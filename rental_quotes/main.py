from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging

from rental_quotes.core.logging import setup_logging
from rental_quotes.core.redis import close_redis
from rental_quotes.core.store import RedisStore, create_store
from rental_quotes.services.workspace import Workspace

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(backend: Optional[str] = None, configure_logging: bool = True) -> AsyncIterator[Workspace]:
    """Open the store, load the workspace, and close the store on exit."""
    if configure_logging:
        setup_logging()
    logger.info("Quote workspace starting...")

    store = await create_store(backend)
    try:
        workspace = await Workspace.load(store)
        yield workspace
    finally:
        logger.info("Quote workspace shutting down...")
        if isinstance(store, RedisStore):
            await close_redis()
        logger.info("Shutdown complete")
