"""Cache utilities for the Pokédex.

Main components:
- DetailCache: memoizing store of detail records and in-flight loads
- CacheBackend: backend interface
- MemoryBackend: in-process dictionary backend
"""

from pokedex.utils.cache.backends import CacheBackend, MemoryBackend
from pokedex.utils.cache.cache import DetailCache

__all__ = [
    "CacheBackend",
    "DetailCache",
    "MemoryBackend",
]
