from abc import ABC, abstractmethod
import math
from datetime import timedelta
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .exceptions import InvalidKeyError, InvalidTTLError

TTL = Union[int, float, timedelta, None]

MAX_KEY_LENGTH = 250
RESERVED_KEY_CHARACTERS = frozenset("{}()/\\@")


def validate_key(key: Any) -> str:
    """
    Raise InvalidKeyError unless `key` is usable by the bundled backends:
    a non-empty str of at most MAX_KEY_LENGTH characters, without whitespace
    and without any of RESERVED_KEY_CHARACTERS. ':' and '.' are allowed.
    """
    if not isinstance(key, str):
        raise InvalidKeyError(key, "key must be a string")
    if not key:
        raise InvalidKeyError(key, "key must not be empty")
    if len(key) > MAX_KEY_LENGTH:
        raise InvalidKeyError(key, f"key is longer than {MAX_KEY_LENGTH} characters")
    for ch in key:
        if ch in RESERVED_KEY_CHARACTERS:
            raise InvalidKeyError(key, f"reserved character {ch!r}")
        if ch.isspace():
            raise InvalidKeyError(key, "key must not contain whitespace")
    return key


def normalize_ttl(ttl: TTL) -> Optional[float]:
    """Convert a TTL to seconds. None means "no expiration"; <= 0 means already expired."""
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        seconds = ttl.total_seconds()
    elif isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
        raise InvalidTTLError(ttl)
    else:
        seconds = float(ttl)
    if not math.isfinite(seconds):
        raise InvalidTTLError(ttl)
    return seconds


class Cache(ABC):
    """
    Minimal cache interface to enable swapping backends (memory, Redis, none) without changing callers.

    The bulk methods loop over the single-key ones; backends with native bulk
    commands should override them.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        ...

    @abstractmethod
    def has(self, key: str) -> bool:
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        ...

    @abstractmethod
    def clear(self) -> bool:
        ...

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> Dict[str, Any]:
        return {key: self.get(key, default) for key in keys}

    def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:
        ok = True
        for key, value in values.items():
            ok = self.set(key, value, ttl) and ok
        return ok

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        for key in keys:
            self.delete(key)
        return True
