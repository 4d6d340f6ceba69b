from datetime import datetime, timedelta, timezone

from catalogresolver.polling import DEFAULT_RESYNC_PERIOD, sync_registry_update_interval

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_short_interval_used_directly():
    interval = timedelta(minutes=5)
    assert sync_registry_update_interval(interval, NOW, NOW, NOW) == interval


def test_interval_equal_to_default_used_directly():
    assert (
        sync_registry_update_interval(DEFAULT_RESYNC_PERIOD, None, NOW, NOW)
        == DEFAULT_RESYNC_PERIOD
    )


def test_remaining_time_before_default():
    # A 40 minute interval polled 30 minutes ago is due in 10 minutes.
    latest = NOW - timedelta(minutes=30)
    result = sync_registry_update_interval(timedelta(minutes=40), latest, NOW, NOW)
    assert result == timedelta(minutes=10)
    assert result < DEFAULT_RESYNC_PERIOD


def test_default_when_poll_far_away():
    result = sync_registry_update_interval(timedelta(hours=1), NOW, NOW, NOW)
    assert result == DEFAULT_RESYNC_PERIOD


def test_falls_back_to_creation_timestamp():
    created = NOW - timedelta(minutes=30)
    with_creation = sync_registry_update_interval(timedelta(minutes=40), None, created, NOW)
    with_poll = sync_registry_update_interval(timedelta(minutes=40), created, NOW, NOW)
    assert with_creation == with_poll
    assert with_creation < DEFAULT_RESYNC_PERIOD


def test_overdue_poll_gives_negative_remaining():
    latest = NOW - timedelta(hours=2)
    result = sync_registry_update_interval(timedelta(hours=1), latest, NOW, NOW)
    assert result < timedelta(0)