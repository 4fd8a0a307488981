"""Unit tests for AvatarCache."""

from app.services.avatar_cache import AvatarCache


class TestGetPut:
    """Tests for get/put with TTL."""

    def test_miss_returns_none(self, clock) -> None:
        cache = AvatarCache(clock=clock)

        assert cache.get("42") is None

    def test_hit_before_expiry(self, clock) -> None:
        cache = AvatarCache(default_ttl_seconds=3600, clock=clock)
        cache.put("42", "https://cdn/a.jpg")

        clock.advance(3599)
        entry = cache.get("42")

        assert entry is not None
        assert entry.url == "https://cdn/a.jpg"

    def test_entry_invalid_at_exact_expiry(self, clock) -> None:
        """Test that an entry is valid strictly before its expiry instant."""
        cache = AvatarCache(default_ttl_seconds=3600, clock=clock)
        cache.put("42", "https://cdn/a.jpg")

        clock.advance(3600)

        assert cache.get("42") is None
        assert len(cache) == 0

    def test_confirmed_absence_is_a_hit(self, clock) -> None:
        cache = AvatarCache(clock=clock)
        cache.put("42", None)

        entry = cache.get("42")

        assert entry is not None
        assert entry.url is None

    def test_explicit_ttl_overrides_default(self, clock) -> None:
        cache = AvatarCache(default_ttl_seconds=3600, clock=clock)
        cache.put("42", "https://cdn/a.jpg", ttl_seconds=10)

        clock.advance(11)

        assert cache.get("42") is None

    def test_put_overwrites_and_extends(self, clock) -> None:
        cache = AvatarCache(default_ttl_seconds=100, clock=clock)
        cache.put("42", "https://cdn/old.jpg")
        clock.advance(90)
        cache.put("42", "https://cdn/new.jpg")
        clock.advance(90)

        entry = cache.get("42")

        assert entry is not None
        assert entry.url == "https://cdn/new.jpg"


class TestMaxSize:
    """Tests for the size cap."""

    def test_evicts_entry_closest_to_expiry(self, clock) -> None:
        cache = AvatarCache(default_ttl_seconds=100, max_size=2, clock=clock)
        cache.put("a", "https://cdn/a.jpg")
        clock.advance(1)
        cache.put("b", "https://cdn/b.jpg")
        clock.advance(1)
        cache.put("c", "https://cdn/c.jpg")

        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("b") is not None
        assert cache.get("c") is not None

    def test_overwrite_does_not_evict(self, clock) -> None:
        cache = AvatarCache(max_size=2, clock=clock)
        cache.put("a", "https://cdn/a.jpg")
        cache.put("b", "https://cdn/b.jpg")
        cache.put("a", "https://cdn/a2.jpg")

        assert len(cache) == 2
        assert cache.get("b") is not None

    def test_clear(self, clock) -> None:
        cache = AvatarCache(clock=clock)
        cache.put("a", None)
        cache.clear()

        assert len(cache) == 0
