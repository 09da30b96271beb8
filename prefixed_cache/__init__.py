from .services.cache import Cache, normalize_ttl, validate_key
from .services.cache_backends import InProcessLRUCache, NullCache, RedisCache
from .services.cache_factory import get_cache, get_prefixed_cache, reset_cache
from .services.exceptions import CacheError, InvalidArgumentError, InvalidKeyError, InvalidTTLError
from .services.prefixed_cache import KEY_SEPARATOR, PrefixedCache

__all__ = [
    "Cache",
    "CacheError",
    "InProcessLRUCache",
    "InvalidArgumentError",
    "InvalidKeyError",
    "InvalidTTLError",
    "KEY_SEPARATOR",
    "NullCache",
    "PrefixedCache",
    "RedisCache",
    "get_cache",
    "get_prefixed_cache",
    "normalize_ttl",
    "reset_cache",
    "validate_key",
]
