"""
tests/auth/test_auth_client_cache.py - ClientCache tests
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from cloud_inventory.auth.cache import ClientCache


class TestClientCache:
    """ClientCache"""

    def test_builds_once_per_key(self):
        cache = ClientCache("aws")
        built = []

        def factory():
            built.append(1)
            return object()

        first = cache.get_or_create("us-east-1", "ec2", factory)
        second = cache.get_or_create("us-east-1", "ec2", factory)

        assert first is second
        assert len(built) == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_keys_by_region_and_service(self):
        cache = ClientCache("aws")

        cache.get_or_create("us-east-1", "ec2", object)
        cache.get_or_create("eu-west-1", "ec2", object)
        cache.get_or_create(None, "iam", object)

        assert len(cache) == 3
        assert ("global", "iam") in cache
        assert cache.keys() == [("us-east-1", "ec2"), ("eu-west-1", "ec2"), ("global", "iam")]

    def test_get_does_not_build(self):
        cache = ClientCache("aws")

        assert cache.get("us-east-1", "ec2") is None
        assert len(cache) == 0

    def test_clear(self):
        cache = ClientCache("aws")
        cache.get_or_create("us-east-1", "ec2", object)
        cache.get_or_create("us-east-1", "ec2", object)

        cache.clear()

        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0

    def test_concurrent_access_builds_once(self):
        cache = ClientCache("aws")
        lock = threading.Lock()
        built = []

        def factory():
            with lock:
                built.append(1)
            return object()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: cache.get_or_create("us-east-1", "s3", factory), range(32)))

        assert len(built) == 1
        assert all(r is results[0] for r in results)
        assert cache.hits + cache.misses == 32
