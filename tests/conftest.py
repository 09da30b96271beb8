# tests/conftest.py
import re
from types import SimpleNamespace

import pytest

from prefixed_cache.services import cache_factory, lru_cache
from prefixed_cache.services.cache import Cache, validate_key


class RecordingCache(Cache):
    """
    Dict-backed Cache that records every call it receives.
    Expiry is not simulated; the TTL argument is only captured.
    """
    def __init__(self):
        self.data = {}
        self.calls = []

    def get(self, key, default=None):
        self.calls.append(("get", key, default))
        return self.data.get(validate_key(key), default)

    def set(self, key, value, ttl=None):
        self.calls.append(("set", key, value, ttl))
        self.data[validate_key(key)] = value
        return True

    def has(self, key):
        self.calls.append(("has", key))
        return validate_key(key) in self.data

    def delete(self, key):
        self.calls.append(("delete", key))
        return self.data.pop(validate_key(key), None) is not None

    def clear(self):
        self.calls.append(("clear",))
        self.data.clear()
        return True

    def get_multiple(self, keys, default=None):
        keys = list(keys)
        self.calls.append(("get_multiple", keys, default))
        return {k: self.data.get(validate_key(k), default) for k in keys}

    def set_multiple(self, values, ttl=None):
        self.calls.append(("set_multiple", dict(values), ttl))
        for k, v in values.items():
            self.data[validate_key(k)] = v
        return True

    def delete_multiple(self, keys):
        keys = list(keys)
        self.calls.append(("delete_multiple", keys))
        for k in keys:
            self.data.pop(validate_key(k), None)
        return True


def _redis_glob(pattern):
    """Compile a redis MATCH pattern, honouring backslash escapes."""
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            i += 1
            out.append(re.escape(pattern[i]))
        elif ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "[":
            end = pattern.index("]", i + 1)
            out.append("[" + pattern[i + 1:end] + "]")
            i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out), re.DOTALL)


class _FakePipeline:
    def __init__(self, client):
        self._client = client
        self._ops = []

    def set(self, key, value, px=None):
        self._ops.append((key, value, px))
        return self

    def execute(self):
        return [self._client.set(k, v, px=px) for k, v, px in self._ops]


class FakeRedis:
    """
    In-memory stand-in for redis.Redis(decode_responses=True), covering only
    the commands RedisCache uses. Expiry is recorded, not enforced.
    """
    def __init__(self):
        self.store = {}
        self.expiry_ms = {}
        self.pipelines = 0

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, px=None):
        self.store[key] = value
        if px is None:
            self.expiry_ms.pop(key, None)
        else:
            self.expiry_ms[key] = px
        return True

    def exists(self, *keys):
        return sum(1 for k in keys if k in self.store)

    def delete(self, *keys):
        removed = 0
        for k in keys:
            if self.store.pop(k, None) is not None:
                removed += 1
            self.expiry_ms.pop(k, None)
        return removed

    def mget(self, keys):
        return [self.store.get(k) for k in keys]

    def flushdb(self):
        self.store.clear()
        self.expiry_ms.clear()
        return True

    def scan_iter(self, match=None):
        for k in list(self.store):
            if match is None or _redis_glob(match).fullmatch(k):
                yield k

    def pipeline(self, transaction=True):
        self.pipelines += 1
        return _FakePipeline(self)


@pytest.fixture
def recording_cache():
    return RecordingCache()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def clock(monkeypatch):
    """Controllable replacement for the clock used by the LRU cache."""
    state = SimpleNamespace(now=1_000_000.0)
    monkeypatch.setattr(lru_cache, "time", SimpleNamespace(time=lambda: state.now))
    return state


@pytest.fixture(autouse=True)
def _fresh_cache_singleton():
    """Each test starts without a process-wide cache."""
    cache_factory.reset_cache()
    yield
    cache_factory.reset_cache()
