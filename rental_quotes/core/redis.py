import logging
from typing import Optional
from redis.asyncio import Redis
from rental_quotes.core.config import settings
from rental_quotes.core.exceptions import StoreError

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Redis:
    global redis
    try:
        redis = Redis.from_url(settings.REDIS_URL, decode_responses=True)
        await redis.ping()
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        redis = None
        raise StoreError(f"Redis unavailable at {settings.REDIS_URL}") from e

async def close_redis():
    global redis
    if redis:
        await redis.aclose()
        redis = None

def get_redis() -> Redis:
    global redis
    if redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return redis
