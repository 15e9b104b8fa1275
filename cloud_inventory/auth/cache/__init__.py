from .cache import CacheEntry, CacheKey, ClientCache

__all__ = ["CacheEntry", "CacheKey", "ClientCache"]
