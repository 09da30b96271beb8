# prefixed_cache/config.py
import os

# Cache configuration:
#   CACHE_BACKEND: "none" | "memory" | "redis"
#   CACHE_CAPACITY: max number of items (memory backend only)
#   CACHE_TTL_SECONDS: default TTL applied by the prefixed cache; 0 means no expiration
#   CACHE_PREFIX: default namespace for get_prefixed_cache()
CACHE_BACKEND = os.getenv("CACHE_BACKEND", "memory").lower()
CACHE_CAPACITY = int(os.getenv("CACHE_CAPACITY", "10000"))
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "0"))  # 0 = no TTL
CACHE_PREFIX = os.getenv("CACHE_PREFIX", "app")

# Redis backend
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_NAMESPACE = os.getenv("REDIS_NAMESPACE", "")  # limits clear() to "<namespace>*" keys
