# File: app/analytics/ranges.py
import calendar
from datetime import date
from typing import Any, Dict


def selected_range(bucket_date: str, count: int, granularity: str) -> Dict[str, Any]:
    """
    Date range behind a clicked bucket: the day itself, its calendar month
    or its calendar year.
    """
    start = date.fromisoformat(bucket_date)

    if granularity == "year":
        start = start.replace(month=1, day=1)
        end = start.replace(month=12, day=31)
        label = str(start.year)
    elif granularity == "month":
        start = start.replace(day=1)
        end = start.replace(day=calendar.monthrange(start.year, start.month)[1])
        label = f"{start:%B} {start.year}"
    elif granularity == "day":
        end = start
        label = f"{start:%b} {start.day}, {start.year}"
    else:
        raise ValueError(f"Unknown granularity: {granularity}")

    return {"start_date": start, "end_date": end, "label": label, "count": int(count)}
