"""
Redis cache client for the dictionary backend.

Caches public dictionary reads and supports path-prefix invalidation,
which is how write actions "revalidate" the pages they affect.
Every operation degrades to a miss/no-op when Redis is unreachable.
"""

import logging
import threading
from typing import Optional

import redis
from redis import Redis

from awadiko.config.settings import settings


class CacheClient:
    """
    Redis cache client with connection management and error handling.
    """

    def __init__(self, redis_url: Optional[str] = None, max_retries: int = 3):
        """
        Initialize the cache client.

        Args:
            redis_url: Redis connection URL (optional, uses settings if not provided)
            max_retries: Connection attempts before the cache is treated as disabled
        """
        self.redis_url = redis_url or settings.redis.url
        self.redis_client: Optional[Redis] = None
        self.logger = logging.getLogger(__name__)
        self._connection_lock = threading.Lock()
        self._is_connected = False
        self._connection_retries = 0
        self._max_retries = max_retries

    def connect(self) -> bool:
        """
        Establish connection to Redis server.

        Returns:
            True if connection successful, False otherwise
        """
        if not self.redis_url:
            self.logger.info("Redis not configured, skipping connection")
            return False

        with self._connection_lock:
            if self._is_connected and self.redis_client:
                return True

            try:
                self.logger.info("Connecting to Redis at %s", self.redis_url)
                self.redis_client = redis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=settings.redis.socket_timeout,
                    socket_connect_timeout=settings.redis.socket_timeout,
                )
                self.redis_client.ping()
                self._is_connected = True
                self._connection_retries = 0
                self.logger.info("Successfully connected to Redis")
                return True

            except redis.RedisError as e:
                self._connection_retries += 1
                self.logger.error(
                    "Failed to connect to Redis (attempt %s): %s", self._connection_retries, e
                )
                self._drop_client()
                return False

    def disconnect(self) -> None:
        """Disconnect from Redis server."""
        with self._connection_lock:
            if self.redis_client:
                try:
                    self.redis_client.close()
                    self.logger.info("Disconnected from Redis")
                except redis.RedisError as e:
                    self.logger.warning("Error during Redis disconnect: %s", e)
                finally:
                    self.redis_client = None
                    self._is_connected = False

    def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Returns:
            Cached value as string or None if not found/error
        """
        if not self._ensure_connection():
            return None

        try:
            value = self.redis_client.get(key)
            self.logger.debug("Cache %s for key: %s", "hit" if value else "miss", key)
            return value
        except redis.RedisError as e:
            self.logger.warning("Error getting cache key '%s': %s", key, e)
            self._handle_connection_error()
            return None

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key to set
            value: Value to cache
            ttl_seconds: Time to live in seconds (defaults to the configured TTL)
        """
        if not self._ensure_connection():
            return False

        ttl = ttl_seconds or settings.redis.cache_ttl_seconds
        try:
            result = self.redis_client.setex(key, ttl, value)
            self.logger.debug("Cache set for key: %s", key)
            return bool(result)
        except redis.RedisError as e:
            self.logger.warning("Error setting cache key '%s': %s", key, e)
            self._handle_connection_error()
            return False

    def delete(self, key: str) -> bool:
        if not self._ensure_connection():
            return False

        try:
            return self.redis_client.delete(key) > 0
        except redis.RedisError as e:
            self.logger.warning("Error deleting cache key '%s': %s", key, e)
            self._handle_connection_error()
            return False

    def delete_prefix(self, prefix: str) -> int:
        """
        Delete every key starting with ``prefix``.

        Returns:
            Number of keys removed (0 when the cache is unavailable)
        """
        if not self._ensure_connection():
            return 0

        removed = 0
        try:
            for key in self.redis_client.scan_iter(match=f"{prefix}*", count=500):
                removed += self.redis_client.delete(key)
            self.logger.debug("Invalidated %s cache key(s) under %s", removed, prefix)
            return removed
        except redis.RedisError as e:
            self.logger.warning("Error invalidating cache prefix '%s': %s", prefix, e)
            self._handle_connection_error()
            return removed

    def ping(self) -> bool:
        if not self._ensure_connection():
            return False

        try:
            return self.redis_client.ping() is True
        except redis.RedisError as e:
            self.logger.warning("Redis ping failed: %s", e)
            self._handle_connection_error()
            return False

    def _ensure_connection(self) -> bool:
        if self._is_connected and self.redis_client:
            return True

        if self._connection_retries >= self._max_retries:
            self.logger.debug(
                "Max connection retries (%s) exceeded, cache operations disabled", self._max_retries
            )
            return False

        return self.connect()

    def _handle_connection_error(self) -> None:
        """Mark the connection as failed so the next call reconnects."""
        self._is_connected = False
        self._drop_client()

    def _drop_client(self) -> None:
        if self.redis_client:
            try:
                self.redis_client.close()
            except redis.RedisError as e:
                self.logger.debug("Ignoring error while closing Redis client: %s", e)
            self.redis_client = None

    @property
    def is_connected(self) -> bool:
        return self._is_connected and self.redis_client is not None


# Global cache client instance
cache_client: Optional[CacheClient] = None


def get_cache_client() -> Optional[CacheClient]:
    """
    Get or create the global cache client instance.

    Returns:
        CacheClient instance or None if caching is disabled
    """
    global cache_client

    if not settings.redis.enabled:
        return None

    if cache_client is None:
        cache_client = CacheClient()
        cache_client.connect()

    return cache_client


def close_cache_client() -> None:
    """Close the global cache client connection."""
    global cache_client

    if cache_client:
        cache_client.disconnect()
        cache_client = None
