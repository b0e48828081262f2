import logging
import datetime as dt

logger = logging.getLogger(__name__)

DEFAULT_DURATION = dt.timedelta(hours=24)


def window_bounds(now, duration=DEFAULT_DURATION):
    return now - duration, now + duration


def select_relevant(events, now, duration=DEFAULT_DURATION):
    """
    Keep the events that start within `duration` of `now`, either side.

    Both ends are inclusive. Events without a timed start (all-day events)
    are skipped. Input order is kept.
    """
    relevant = []
    for event in events:
        start = event.start_time
        if start is None:
            logger.debug("Skipping event without a start time: %r", event.title)
            continue

        until_start = start - now
        since_start = now - start
        if (dt.timedelta(0) <= until_start <= duration) or (
            dt.timedelta(0) <= since_start <= duration
        ):
            relevant.append(event)
    return relevant
