import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from redis import Redis

from .cache import Cache, TTL, normalize_ttl, validate_key
from .lru_cache import LRUCacheImpl, MISSING

logger = logging.getLogger(__name__)

REDIS_GLOB_SPECIALS = frozenset("*?[]\\")


def _ensure_json_native(value: Any) -> None:
    """
    Raise TypeError for values json would store but not give back unchanged:
    tuples (read back as lists) and dicts with non-str keys (keys read back as str).
    """
    if isinstance(value, tuple):
        raise TypeError("RedisCache cannot store tuples losslessly; use a list")
    if isinstance(value, list):
        for item in value:
            _ensure_json_native(item)
    elif isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(f"RedisCache needs str dict keys, got {type(k).__name__} key {k!r}")
            _ensure_json_native(v)


def escape_glob(pattern: str) -> str:
    """Escape redis MATCH glob metacharacters so `pattern` matches only itself."""
    return "".join("\\" + ch if ch in REDIS_GLOB_SPECIALS else ch for ch in pattern)


class InProcessLRUCache(Cache):
    """In-process LRU cache backend."""
    def __init__(self, capacity: int):
        self._lru = LRUCacheImpl(capacity=capacity)

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lru.get(validate_key(key))
        return default if value is MISSING else value

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        self._lru.set(validate_key(key), value, normalize_ttl(ttl))
        return True

    def has(self, key: str) -> bool:
        return self._lru.has(validate_key(key))

    def delete(self, key: str) -> bool:
        return self._lru.delete(validate_key(key))

    def clear(self) -> bool:
        self._lru.clear()
        return True


class RedisCache(Cache):
    """
    Shared cache backend on top of a synchronous redis client.

    Values are stored as compact JSON and must survive the round-trip
    unchanged: lists, str-keyed dicts, str, numbers, bools and None. Tuples,
    dicts with non-str keys and anything json cannot encode raise TypeError
    before redis is touched. Keys are used verbatim. `namespace`, when set,
    restricts clear() to keys starting with it; without one clear() flushes
    the whole database.
    """

    def __init__(self, url: Optional[str] = None, client: Optional[Redis] = None, namespace: str = ""):
        if client is None:
            if url is None:
                raise ValueError("RedisCache needs either a url or a client")
            client = Redis.from_url(url, decode_responses=True)
        self._client = client
        self._namespace = namespace

    @staticmethod
    def _dumps(value: Any) -> str:
        _ensure_json_native(value)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    @staticmethod
    def _loads(raw: Any, default: Any) -> Any:
        if raw is None:
            return default
        return json.loads(raw)

    @staticmethod
    def _expiry_ms(seconds: float) -> int:
        return max(1, int(seconds * 1000))

    def get(self, key: str, default: Any = None) -> Any:
        return self._loads(self._client.get(validate_key(key)), default)

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        key = validate_key(key)
        seconds = normalize_ttl(ttl)
        if seconds is not None and seconds <= 0:
            self._client.delete(key)
            return True
        payload = self._dumps(value)
        if seconds is None:
            return bool(self._client.set(key, payload))
        return bool(self._client.set(key, payload, px=self._expiry_ms(seconds)))

    def has(self, key: str) -> bool:
        return self._client.exists(validate_key(key)) > 0

    def delete(self, key: str) -> bool:
        return self._client.delete(validate_key(key)) > 0

    def clear(self) -> bool:
        if not self._namespace:
            logger.debug("redis_cache: flushing database")
            return bool(self._client.flushdb())
        removed = 0
        batch = []
        for key in self._client.scan_iter(match=escape_glob(self._namespace) + "*"):
            batch.append(key)
            if len(batch) >= 500:
                removed += self._client.delete(*batch)
                batch = []
        if batch:
            removed += self._client.delete(*batch)
        logger.debug("redis_cache: cleared %d keys under namespace %r", removed, self._namespace)
        return True

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> Dict[str, Any]:
        keys = [validate_key(k) for k in keys]
        if not keys:
            return {}
        raws = self._client.mget(keys)
        return {key: self._loads(raw, default) for key, raw in zip(keys, raws)}

    def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:
        items = [(validate_key(k), v) for k, v in values.items()]
        seconds = normalize_ttl(ttl)
        if not items:
            return True
        if seconds is not None and seconds <= 0:
            self._client.delete(*[k for k, _ in items])
            return True
        # Serialize everything before touching redis so a bad value stores nothing.
        payloads = [(k, self._dumps(v)) for k, v in items]
        pipe = self._client.pipeline(transaction=False)
        for key, payload in payloads:
            if seconds is None:
                pipe.set(key, payload)
            else:
                pipe.set(key, payload, px=self._expiry_ms(seconds))
        results = pipe.execute()
        logger.debug("redis_cache: set_multiple stored %d keys", len(results))
        return all(bool(r) for r in results)

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        keys = [validate_key(k) for k in keys]
        if keys:
            self._client.delete(*keys)
        return True


class NullCache(Cache):
    """No-op cache used when caching is disabled or backend is not configured."""
    def get(self, key: str, default: Any = None) -> Any: return default
    def set(self, key: str, value: Any, ttl: TTL = None) -> bool: return True
    def has(self, key: str) -> bool: return False
    def delete(self, key: str) -> bool: return False
    def clear(self) -> bool: return True
