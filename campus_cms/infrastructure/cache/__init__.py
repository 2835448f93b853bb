"""Cache: in-process and Redis backends, cache-aside helper, key builders.

Read paths use cache_aside(); write paths invalidate through the write
pipeline using the prefixes and key builders in keys.py.
"""

from campus_cms.infrastructure.cache.cache_protocol import CacheProtocol
from campus_cms.infrastructure.cache.factory import build_cache
from campus_cms.infrastructure.cache.memory_cache import MemoryCache
from campus_cms.infrastructure.cache.read_through import cache_aside

__all__ = [
    "CacheProtocol",
    "MemoryCache",
    "build_cache",
    "cache_aside",
]
