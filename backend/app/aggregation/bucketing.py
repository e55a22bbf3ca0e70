# File: app/aggregation/bucketing.py
"""
Turns matching document dates into a contiguous, zero-filled bucket series.

1. truncate every date to the start of its period (day/month/year)
2. count documents per period
3. generate every period between the first and last one, inclusive
4. left-merge the counts onto that timeline (missing periods -> 0)
"""

from datetime import date
from typing import Dict, Iterable, List

import pandas as pd

# pandas Period frequency per granularity
PERIOD_FREQ = {"day": "D", "month": "M", "year": "Y"}


def truncate_date(value: date, granularity: str) -> date:
    """Start of the day/month/year containing `value`."""
    if granularity == "day":
        return value
    if granularity == "month":
        return value.replace(day=1)
    if granularity == "year":
        return value.replace(month=1, day=1)
    raise ValueError(f"Unknown granularity: {granularity}")


def build_buckets(dates: Iterable[date], granularity: str) -> List[Dict[str, object]]:
    """
    Contiguous ascending series of {"bucket_date": "YYYY-MM-DD", "count": int}.
    Returns [] when there are no dates.
    """
    dates = list(dates)
    if not dates:
        return []

    freq = PERIOD_FREQ[granularity]
    periods = pd.to_datetime(pd.Series(dates)).dt.to_period(freq)

    counts = periods.value_counts()
    timeline = pd.period_range(start=periods.min(), end=periods.max(), freq=freq)
    counts = counts.reindex(timeline, fill_value=0).sort_index()

    return [
        {"bucket_date": period.start_time.strftime("%Y-%m-%d"), "count": int(count)}
        for period, count in counts.items()
    ]
