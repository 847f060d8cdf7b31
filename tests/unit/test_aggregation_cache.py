"""Unit tests for the ResultCache class."""

import pytest

from github_dev_aggregator.aggregation.cache import ResultCache, account_key, developers_key

from .utils import FakeClock


def test_get_returns_value_within_ttl(fake_clock: FakeClock) -> None:
    """Test that a value is served until its TTL elapses."""
    cache = ResultCache(ttl_seconds=3600, clock=fake_clock)
    cache.set("developers", ["octocat"])
    fake_clock.advance(3599)
    assert cache.get("developers") == ["octocat"]


def test_get_after_ttl_is_a_miss(fake_clock: FakeClock) -> None:
    """Test that an expired entry is a miss and is dropped."""
    cache = ResultCache(ttl_seconds=3600, clock=fake_clock)
    cache.set("developers", ["octocat"])
    fake_clock.advance(3600)
    assert cache.get("developers") is None
    assert len(cache) == 0


@pytest.mark.parametrize("ttl_seconds", [0.5, 60, 3600])
def test_expired_entry_is_never_served(fake_clock: FakeClock, ttl_seconds: float) -> None:
    """Test that no TTL window serves a stale value once it elapsed."""
    cache = ResultCache(ttl_seconds=ttl_seconds, clock=fake_clock)
    cache.set("user-octocat", "detail")
    fake_clock.advance(ttl_seconds + 0.001)
    assert cache.get("user-octocat") is None


def test_set_replaces_expired_entry(fake_clock: FakeClock) -> None:
    """Test that setting a key again restarts its TTL."""
    cache = ResultCache(ttl_seconds=10, clock=fake_clock)
    cache.set("key", "old")
    fake_clock.advance(11)
    cache.set("key", "new")
    fake_clock.advance(5)
    assert cache.get("key") == "new"


def test_miss_on_unknown_key(fake_clock: FakeClock) -> None:
    """Test that an unknown key is a miss."""
    cache = ResultCache(clock=fake_clock)
    assert cache.get("missing") is None


def test_invalidate_and_clear(fake_clock: FakeClock) -> None:
    """Test dropping one entry and every entry."""
    cache = ResultCache(clock=fake_clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.invalidate("a")
    assert cache.get("a") is None
    assert cache.get("b") == 2
    cache.clear()
    assert len(cache) == 0


def test_non_positive_ttl_rejected() -> None:
    """Test that a cache cannot be built with a TTL of zero."""
    with pytest.raises(ValueError):
        ResultCache(ttl_seconds=0)


def test_keyspaces_are_independent() -> None:
    """Test that account keys are case-insensitive and never collide with the listing key."""
    assert account_key("OctoCat") == account_key("octocat") == "user-octocat"
    assert developers_key() == "developers"
    assert account_key("developers") != developers_key()
