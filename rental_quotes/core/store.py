"""Key-value persistence for inventory, configuration, counter and history.

Values are JSON documents. A missing key reads back as ``None`` and callers
substitute their own default.
"""
import json
import logging
from typing import Any, Dict, Optional, Protocol

from rental_quotes.core.config import settings
from rental_quotes.core.enums import StoreBackend
from rental_quotes.core.metrics import track_store_operation
from rental_quotes.core.redis import init_redis, get_redis

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


def _decode(raw: Optional[str], key: str) -> Optional[Any]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        # Values written by older clients may be bare strings (e.g. a logo data URL).
        logger.debug(f"Value under {key} is not JSON, returning raw text")
        return raw


class RedisStore:

    def __init__(self, prefix: str = settings.STORE_KEY_PREFIX):
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @track_store_operation("get")
    async def get(self, key: str) -> Optional[Any]:
        raw = await get_redis().get(self._key(key))
        return _decode(raw, key)

    @track_store_operation("set")
    async def set(self, key: str, value: Any) -> None:
        await get_redis().set(self._key(key), json.dumps(value, default=str))

    @track_store_operation("delete")
    async def delete(self, key: str) -> None:
        await get_redis().delete(self._key(key))


class MemoryStore:
    """In-process store; values go through JSON like they would in Redis."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value, default=str)

    @track_store_operation("get")
    async def get(self, key: str) -> Optional[Any]:
        return _decode(self._data.get(key), key)

    @track_store_operation("set")
    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, default=str)

    @track_store_operation("delete")
    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


async def create_store(backend: Optional[str] = None) -> KeyValueStore:
    backend = StoreBackend(backend or settings.STORE_BACKEND)
    if backend is StoreBackend.MEMORY:
        logger.info("Using in-memory store")
        return MemoryStore()
    await init_redis()
    return RedisStore()
