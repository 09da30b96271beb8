class CacheError(Exception):
    """Base class for errors raised by cache backends."""


class InvalidArgumentError(CacheError, ValueError):
    """An argument passed to a cache backend is not acceptable."""


class InvalidKeyError(InvalidArgumentError):
    """The key is not a legal cache key for the backend."""

    def __init__(self, key, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid cache key {key!r}: {reason}")


class InvalidTTLError(InvalidArgumentError):
    """The TTL is neither None, a finite number of seconds nor a finite timedelta."""

    def __init__(self, ttl):
        self.ttl = ttl
        super().__init__(f"Invalid cache TTL {ttl!r}: expected seconds or timedelta")
