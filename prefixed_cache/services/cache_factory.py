import logging
from typing import Optional

from .cache import Cache, TTL
from .cache_backends import InProcessLRUCache, NullCache, RedisCache
from .prefixed_cache import PrefixedCache
from prefixed_cache.config import (
    CACHE_BACKEND,
    CACHE_CAPACITY,
    CACHE_PREFIX,
    CACHE_TTL_SECONDS,
    REDIS_NAMESPACE,
    REDIS_URL,
)

logger = logging.getLogger(__name__)

_cache_singleton: Optional[Cache] = None

_UNSET = object()


def get_cache() -> Cache:
    """
    Returns a process-wide cache instance based on configuration:
      - "none"   -> no-op backend (always misses)
      - "memory" -> in-process LRU (fastest for single instance)
      - "redis"  -> shared cache across processes

    Unknown values fall back to the in-process LRU.
    """
    global _cache_singleton
    if _cache_singleton is not None:
        return _cache_singleton

    if CACHE_BACKEND == "memory":
        _cache_singleton = InProcessLRUCache(capacity=CACHE_CAPACITY)
    elif CACHE_BACKEND == "none":
        _cache_singleton = NullCache()
    elif CACHE_BACKEND == "redis":
        _cache_singleton = RedisCache(url=REDIS_URL, namespace=REDIS_NAMESPACE)
    else:
        logger.warning("Unknown CACHE_BACKEND %r; using in-process LRU", CACHE_BACKEND)
        _cache_singleton = InProcessLRUCache(capacity=CACHE_CAPACITY)

    logger.info("Cache backend initialised: %s", type(_cache_singleton).__name__)
    return _cache_singleton


def get_prefixed_cache(prefix: str = CACHE_PREFIX, ttl: TTL = _UNSET) -> PrefixedCache:
    """
    Wrap the process-wide cache in a PrefixedCache.

    Without an explicit `ttl` the default comes from CACHE_TTL_SECONDS
    (0 means no default TTL). Pass ttl=None to disable it explicitly.
    """
    if ttl is _UNSET:
        ttl = CACHE_TTL_SECONDS or None
    return PrefixedCache(get_cache(), prefix, ttl)


def reset_cache() -> None:
    """Forget the process-wide cache so the next get_cache() builds a new one."""
    global _cache_singleton
    _cache_singleton = None
