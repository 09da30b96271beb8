from typing import Any, Iterable, Mapping

from .cache import Cache, TTL

KEY_SEPARATOR = "."


class PrefixedCache:
    """
    Namespacing facade over any Cache backend.

    Every key is stored as "<prefix>.<key>" and writes that omit a TTL use the
    one given at construction. Nothing else happens here: key legality, expiry
    and error signalling are whatever the wrapped cache does, and its results
    and exceptions are passed through unchanged.

    The wrapped cache is shared, not owned; several PrefixedCache instances
    with different prefixes can sit on the same backend.
    """

    def __init__(self, cache: Cache, prefix: str, ttl: TTL = None):
        self._cache = cache
        self._prefix = prefix
        self._ttl = ttl

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def ttl(self) -> TTL:
        return self._ttl

    def key_with_prefix(self, key: str) -> str:
        """Return the full storage key for `key`, including the prefix. Non-str keys go through str()."""
        return f"{self._prefix}{KEY_SEPARATOR}{key}"

    def _ttl_or_default(self, ttl: TTL) -> TTL:
        return ttl if ttl is not None else self._ttl

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """
        Store `value` under the prefixed key.

        `ttl` (seconds or timedelta) overrides the default TTL for this call
        only. Returns the backend's result, True on success.

        Raises InvalidKeyError (from the backend) if the key is not legal there.
        """
        return self._cache.set(self.key_with_prefix(key), value, self._ttl_or_default(ttl))

    def has(self, key: str) -> bool:
        """
        Whether the prefixed key is present.

        Only use this for cache warming. Another client may remove the entry
        right after has() returns True, so it is no precondition for get().
        """
        return self._cache.has(self.key_with_prefix(key))

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under the prefixed key, or `default` on a miss."""
        return self._cache.get(self.key_with_prefix(key), default)

    def delete(self, key: str) -> bool:
        return self._cache.delete(self.key_with_prefix(key))

    def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:
        """Store all key => value pairs in one backend call, with `ttl` or the default TTL."""
        prefixed = {self.key_with_prefix(key): value for key, value in values.items()}
        return self._cache.set_multiple(prefixed, self._ttl_or_default(ttl))

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> Any:
        """
        Fetch several keys in one backend call.

        The result is returned exactly as the backend produces it, so it is
        keyed by the *prefixed* names ("<prefix>.<key>"), with `default` for
        missing entries. Use key_with_prefix() to look results up.
        """
        return self._cache.get_multiple([self.key_with_prefix(key) for key in keys], default)

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        return self._cache.delete_multiple([self.key_with_prefix(key) for key in keys])

    def __repr__(self) -> str:
        return f"PrefixedCache(prefix={self._prefix!r}, ttl={self._ttl!r}, cache={self._cache!r})"
