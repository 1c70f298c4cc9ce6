"""Tests for SubscriptionRegistry."""

from concurrent.futures import ThreadPoolExecutor

from app.pricebot.registry import SubscriptionRegistry


class TestSubscriptionRegistry:
    """Unit tests for the registry of known destinations."""

    def test_add_new_key(self):
        registry = SubscriptionRegistry()
        assert registry.add("@chan") is True
        assert registry.contains("@chan")

    def test_add_is_idempotent(self):
        """A second add reports False and does not grow the registry."""
        registry = SubscriptionRegistry()
        registry.add("@chan")
        assert registry.add("@chan") is False
        assert len(registry) == 1

    def test_contains_unknown(self):
        registry = SubscriptionRegistry()
        assert not registry.contains("@nope")
        assert "@nope" not in registry

    def test_in_operator(self):
        registry = SubscriptionRegistry()
        registry.add("@chan")
        assert "@chan" in registry

    def test_keys_sorted_snapshot(self):
        registry = SubscriptionRegistry()
        registry.add("@b")
        registry.add("@a")
        keys = registry.keys()
        assert keys == ["@a", "@b"]
        keys.append("@c")
        assert "@c" not in registry

    def test_concurrent_adds_from_threads(self):
        """100 threads adding 100 distinct keys lose no updates."""
        registry = SubscriptionRegistry()
        keys = [f"@chan{i}" for i in range(100)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(registry.add, keys))

        assert all(results)
        assert len(registry) == 100

    def test_concurrent_duplicate_adds_insert_once(self):
        """Racing adds of the same key: exactly one reports insertion."""
        registry = SubscriptionRegistry()

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(registry.add, ["@same"] * 50))

        assert results.count(True) == 1
        assert len(registry) == 1
