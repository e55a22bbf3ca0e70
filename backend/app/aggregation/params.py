# File: app/aggregation/params.py
"""
Input normalization for the document aggregation query.

Every entry point (HTTP API, dashboard client, tests) builds an
AggregationParams through `build_params`, so validation lives in one place.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from app.core.errors import ValidationError

logger = logging.getLogger("uvicorn")

GRANULARITIES = ("day", "month", "year")
MATCH_FIELDS = ("text", "text_or_title")


@dataclass(frozen=True)
class AggregationParams:
    terms: Tuple[str, ...]
    granularity: str = "day"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    match_field: str = "text"
    export: bool = False

    @property
    def has_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @property
    def wants_documents(self) -> bool:
        return self.has_range or self.export


def normalize_terms(terms: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """Trim, drop empties and de-duplicate case-insensitively (first spelling wins)."""
    seen = set()
    out: List[str] = []
    for raw in terms or []:
        cleaned = (raw or "").strip()
        if not cleaned:
            continue
        key = cleaned.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(cleaned)
    return tuple(out)


def normalize_date(value, strict: bool = False) -> Optional[date]:
    """
    Parse a plain calendar date from YYYY-MM-DD or an ISO datetime.

    Aware datetimes are converted to UTC before the date part is taken.
    Unparseable values return None (treated as absent) unless `strict`.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None

    # Plain dates skip pandas so values past Timestamp.max (9999-12-31) still parse
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    ts = pd.to_datetime(text, errors="coerce")
    if pd.isna(ts):
        if strict:
            raise ValidationError(f"Invalid date: {value!r}")
        logger.warning(f"⚠️ Ignoring malformed date parameter {value!r}")
        return None

    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC")
    return ts.date()


def build_params(
    terms: Iterable[Optional[str]],
    granularity: Optional[str] = "day",
    start_date=None,
    end_date=None,
    match_field: Optional[str] = "text",
    export: bool = False,
    strict_dates: bool = False,
) -> AggregationParams:
    """Validate raw inputs into AggregationParams or raise ValidationError."""
    normalized_terms = normalize_terms(terms)
    if not normalized_terms:
        raise ValidationError("term is required")

    granularity = (granularity or "day").strip().lower()
    if granularity not in GRANULARITIES:
        raise ValidationError(
            f"Invalid granularity: {granularity!r} (expected one of {', '.join(GRANULARITIES)})"
        )

    match_field = (match_field or "text").strip().lower()
    if match_field not in MATCH_FIELDS:
        raise ValidationError(
            f"Invalid matchField: {match_field!r} (expected one of {', '.join(MATCH_FIELDS)})"
        )

    start = normalize_date(start_date, strict=strict_dates)
    end = normalize_date(end_date, strict=strict_dates)

    if (start is None) != (end is None):
        raise ValidationError("Both startDate and endDate are required when filtering by range")
    if start is not None and start > end:
        raise ValidationError("startDate must be on or before endDate")

    return AggregationParams(
        terms=normalized_terms,
        granularity=granularity,
        start_date=start,
        end_date=end,
        match_field=match_field,
        export=bool(export),
    )
