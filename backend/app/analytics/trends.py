# File: app/analytics/trends.py
"""
Derived analytics over a bucket series, as rendered by the dashboard:
rolling trend line, 30-day change and the KPI summary.
"""

import math
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from settings import DashboardConfig


def _bucket_date(bucket) -> str:
    if isinstance(bucket, Mapping):
        return bucket["bucket_date"]
    return bucket.bucket_date


def _bucket_count(bucket) -> int:
    if isinstance(bucket, Mapping):
        return int(bucket["count"])
    return int(bucket.count)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the chart does: halves go up, not to even."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def trend_window(granularity: str) -> int:
    return DashboardConfig.TREND_WINDOWS.get(granularity, DashboardConfig.TREND_WINDOWS["day"])


def rolling_trend(buckets: Sequence, granularity: str) -> List[float]:
    """
    Trailing mean of `count` ending at each bucket, clipped at the series
    start (no zero padding), rounded to one decimal.
    """
    if not buckets:
        return []
    counts = pd.Series([_bucket_count(b) for b in buckets], dtype="float64")
    means = counts.rolling(window=trend_window(granularity), min_periods=1).mean()
    return (np.floor(means.to_numpy() * 10 + 0.5) / 10).tolist()


def format_bucket_label(bucket_date: str, granularity: str) -> str:
    """Short axis label: 'Mar 15', 'Mar 2024' or '2024'."""
    d = date.fromisoformat(bucket_date)
    if granularity == "year":
        return str(d.year)
    if granularity == "month":
        return f"{d:%b} {d.year}"
    return f"{d:%b} {d.day}"


def chart_points(buckets: Sequence, granularity: str) -> List[Dict[str, Any]]:
    """Buckets decorated with an axis label and the rolling trend value."""
    trend = rolling_trend(buckets, granularity)
    return [
        {
            "bucket_date": _bucket_date(b),
            "count": _bucket_count(b),
            "label": format_bucket_label(_bucket_date(b), granularity),
            "trend": trend[i],
        }
        for i, b in enumerate(buckets)
    ]


def month_trend(buckets: Sequence, lookback_days: int = DashboardConfig.TREND_LOOKBACK_DAYS) -> Dict[str, Any]:
    """
    Matches added in (latest - 30 days, latest] versus everything before.

    percent_change is None when there was no baseline but there is new
    activity, 0 when both are zero.
    """
    total = sum(_bucket_count(b) for b in buckets)
    if not buckets:
        return {"total_count": 0, "added_last_30": 0, "base_before_30": 0, "percent_change": 0}

    dates = [date.fromisoformat(_bucket_date(b)) for b in buckets]
    end = max(dates)
    window_start = end - timedelta(days=lookback_days)

    added = sum(_bucket_count(b) for b, d in zip(buckets, dates) if window_start < d <= end)
    base = total - added

    percent_change: Optional[int]
    if base <= 0 and added > 0:
        percent_change = None
    elif base <= 0:
        percent_change = 0
    else:
        percent_change = int(round_half_up(added / base * 100))

    return {
        "total_count": total,
        "added_last_30": added,
        "base_before_30": base,
        "percent_change": percent_change,
    }


def summarize(buckets: Sequence) -> Dict[str, Any]:
    """KPI cards: total mentions, active periods, peak bucket, 30-day trend."""
    peak = None
    for b in buckets:
        if _bucket_count(b) > 0 and (peak is None or _bucket_count(b) > peak["count"]):
            peak = {"bucket_date": _bucket_date(b), "count": _bucket_count(b)}

    return {
        "total_mentions": sum(_bucket_count(b) for b in buckets),
        "periods_with_mentions": sum(1 for b in buckets if _bucket_count(b) > 0),
        "peak": peak,
        "month_trend": month_trend(buckets),
    }
