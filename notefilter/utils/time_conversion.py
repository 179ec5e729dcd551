import time
from datetime import date, datetime, time as dt_time, tzinfo
from typing import Optional


def get_epoch_timestamp_in_seconds() -> int:
    """Current time as whole unix seconds"""
    return int(time.time())


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """Midnight at the start of ``day``; naive (local time) when ``tz`` is None"""
    return datetime.combine(day, dt_time.min, tzinfo=tz)


def to_epoch(moment: datetime) -> int:
    """Whole unix seconds for a datetime (naive values are local time)"""
    return int(moment.timestamp())


def format_epoch_date(epoch: float) -> str:
    """Format unix seconds as a local calendar date (YYYY-MM-DD)"""
    return datetime.fromtimestamp(epoch).strftime("%Y-%m-%d")
