"""
Session Store Module

Key/value persistence behind the session manager. The store only moves
strings; serialization belongs to the caller.

Key Features:
- JSON-file store for single-user local runs
- Redis store for shared deployments
- Factory selecting the backend from settings
"""

from abc import ABC, abstractmethod
from typing import Optional

import redis

from ..utils.config import settings
from ..utils.logger import sessions_logger as logger
from ..utils.storage import StorageService


class KeyValueStore(ABC):
    """Minimal string key/value interface."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


class FileKeyValueStore(KeyValueStore):
    """Stores each key as a JSON document in a directory."""

    def __init__(self, base_dir: Optional[str] = None):
        self.storage = StorageService(base_dir or settings.SESSIONS_DIR)

    def get(self, key: str) -> Optional[str]:
        data = self.storage.load_data(key)
        return data.get("value") if isinstance(data, dict) else None

    def set(self, key: str, value: str) -> None:
        self.storage.save_data({"key": key, "value": value}, key)

    def delete(self, key: str) -> None:
        self.storage.delete_data(key)


class RedisKeyValueStore(KeyValueStore):
    """Stores keys in Redis under a namespace prefix."""

    def __init__(self, client: Optional[redis.Redis] = None, url: Optional[str] = None,
                 namespace: str = "venturescope"):
        self.redis = client or redis.Redis.from_url(
            url or settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.redis.get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.redis.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self.redis.delete(self._key(key))


def create_store(backend: Optional[str] = None) -> KeyValueStore:
    """Create the store configured by SESSION_BACKEND."""
    backend = (backend or settings.SESSION_BACKEND).lower()
    logger.info(f"Using {backend} session store")
    if backend == "redis":
        return RedisKeyValueStore()
    if backend == "file":
        return FileKeyValueStore()
    raise ValueError(f"Unknown session backend: {backend}")
