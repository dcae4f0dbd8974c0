from datetime import datetime, timedelta, timezone
from typing import Optional

from utils.constants import LOCATION_STALE_THRESHOLD_MINUTES


STALE_THRESHOLD = timedelta(minutes=LOCATION_STALE_THRESHOLD_MINUTES)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_location_fresh(last_update: Optional[datetime], now: datetime,
                      threshold: timedelta = STALE_THRESHOLD) -> bool:
    """
        A location is fresh when it was written less than `threshold` before `now`.
        :param last_update: time of the last location write, None if never written
        :param now: reference time of the check
        :param threshold: staleness window, exclusive
    """
    if last_update is None:
        return False
    return as_utc(now) - as_utc(last_update) < threshold
