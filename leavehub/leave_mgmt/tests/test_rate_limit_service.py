import logging

from leave_mgmt.services import rate_limit_service
from leave_mgmt.services.rate_limit_service import hit, identity_for


def test_counts_down_then_denies(settings):
    settings.ORG_STATS_RATE_LIMIT = 3
    settings.ORG_STATS_RATE_WINDOW = 60
    now = 1_000_020.0

    usages = [hit("user:1", now=now) for _ in range(4)]

    assert [u.allowed for u in usages] == [True, True, True, False]
    assert [u.remaining for u in usages] == [2, 1, 0, 0]
    assert usages[-1].retry_after == 60 - (1_000_020 % 60)
    assert usages[-1].reset_at == (1_000_020 // 60 + 1) * 60


def test_new_window_resets_counter():
    now = 600.0
    for _ in range(2):
        hit("user:1", limit=2, window=60, now=now)
    assert not hit("user:1", limit=2, window=60, now=now + 30).allowed

    usage = hit("user:1", limit=2, window=60, now=now + 60)
    assert usage.allowed
    assert usage.remaining == 1


def test_callers_and_scopes_are_independent():
    now = 600.0
    assert hit("user:1", limit=1, window=60, now=now).allowed
    assert not hit("user:1", limit=1, window=60, now=now).allowed
    assert hit("user:2", limit=1, window=60, now=now).allowed
    assert hit("user:1", scope="other", limit=1, window=60, now=now).allowed


def test_retry_after_is_at_least_one_second():
    now = 659.5
    hit("user:1", limit=1, window=60, now=now)

    usage = hit("user:1", limit=1, window=60, now=now)

    assert not usage.allowed
    assert usage.retry_after == 1
    assert usage.headers()["Retry-After"] == "1"


def test_cache_outage_lets_request_through(monkeypatch, caplog):
    def down(key, ttl):
        raise ConnectionError("cache down")

    monkeypatch.setattr(rate_limit_service, "_bump", down)
    with caplog.at_level(logging.ERROR, logger="leave_mgmt"):
        usage = hit("user:1", limit=5, window=60, now=600.0)

    assert usage.allowed
    assert usage.remaining == 5
    assert "cache unavailable" in caplog.text


def test_identity_prefers_user_over_ip():
    assert identity_for(user_id=7, ip="10.0.0.1") == "user:7"
    assert identity_for(ip="10.0.0.1") == "ip:10.0.0.1"
    assert identity_for() == "ip:unknown"
