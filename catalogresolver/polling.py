"""Requeue intervals for catalogs that poll their registry image."""

from __future__ import annotations

from datetime import datetime, timedelta

DEFAULT_RESYNC_PERIOD = timedelta(minutes=15)


def sync_registry_update_interval(
    polling_interval: timedelta,
    latest_poll: datetime | None,
    creation_timestamp: datetime,
    now: datetime,
) -> timedelta:
    """Return how long to wait before reconciling a polling catalog again.

    Intervals no longer than the default resync period are used as is.
    Longer intervals yield the time left until the next poll is due, or the
    default period if that is sooner. A missing ``latest_poll`` falls back to
    the catalog's creation time.
    """
    if polling_interval <= DEFAULT_RESYNC_PERIOD:
        return polling_interval
    last = latest_poll if latest_poll is not None else creation_timestamp
    remaining = last + polling_interval - now
    if remaining < DEFAULT_RESYNC_PERIOD:
        return remaining
    return DEFAULT_RESYNC_PERIOD