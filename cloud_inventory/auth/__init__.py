"""
cloud_inventory/auth - Credential resolution and client caching

- CredentialChain: static -> profile -> ambient fallback, first complete source wins
- ClientCache: per-driver (region-or-global, service) -> client cache

Usage:
    from cloud_inventory.auth import ClientCache, CredentialChain

Note:
    Submodules are imported lazily on first attribute access.
"""

__all__ = [
    "CredentialChain",
    "CredentialResolver",
    "CredentialSource",
    "ResolvedCredentials",
    "CacheEntry",
    "ClientCache",
]

_IMPORT_MAPPING = {
    "CredentialChain": (".chain", "CredentialChain"),
    "CredentialResolver": (".chain", "CredentialResolver"),
    "CredentialSource": (".chain", "CredentialSource"),
    "ResolvedCredentials": (".chain", "ResolvedCredentials"),
    "CacheEntry": (".cache", "CacheEntry"),
    "ClientCache": (".cache", "ClientCache"),
}


def __getattr__(name: str):
    if name in _IMPORT_MAPPING:
        module_path, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_path, __name__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
