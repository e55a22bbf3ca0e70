"""Tests for the contiguous bucket series."""

from datetime import date

import pytest

from app.aggregation.bucketing import build_buckets, truncate_date


class TestTruncateDate:
    @pytest.mark.parametrize(
        "granularity, expected",
        [("day", date(2024, 3, 15)), ("month", date(2024, 3, 1)), ("year", date(2024, 1, 1))],
    )
    def test_truncates_to_period_start(self, granularity, expected) -> None:
        assert truncate_date(date(2024, 3, 15), granularity) == expected

    def test_unknown_granularity(self) -> None:
        with pytest.raises(ValueError):
            truncate_date(date(2024, 3, 15), "week")


class TestBuildBuckets:
    def test_empty_input_gives_empty_series(self) -> None:
        assert build_buckets([], "day") == []

    @pytest.mark.parametrize(
        "granularity, expected",
        [("day", "2024-03-15"), ("month", "2024-03-01"), ("year", "2024-01-01")],
    )
    def test_single_date_bucket_label(self, granularity, expected) -> None:
        assert build_buckets([date(2024, 3, 15)], granularity) == [{"bucket_date": expected, "count": 1}]

    def test_month_gaps_are_zero_filled(self) -> None:
        buckets = build_buckets([date(2024, 1, 5), date(2024, 3, 10)], "month")
        assert buckets == [
            {"bucket_date": "2024-01-01", "count": 1},
            {"bucket_date": "2024-02-01", "count": 0},
            {"bucket_date": "2024-03-01", "count": 1},
        ]

    def test_day_series_is_contiguous_and_sorted(self) -> None:
        dates = [date(2024, 2, 28), date(2024, 3, 2), date(2024, 2, 28), date(2024, 3, 1)]
        buckets = build_buckets(dates, "day")
        assert [b["bucket_date"] for b in buckets] == ["2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02"]
        assert [b["count"] for b in buckets] == [2, 0, 1, 1]

    def test_year_series_spans_all_years(self) -> None:
        buckets = build_buckets([date(2019, 12, 31), date(2022, 1, 1), date(2022, 6, 30)], "year")
        assert buckets == [
            {"bucket_date": "2019-01-01", "count": 1},
            {"bucket_date": "2020-01-01", "count": 0},
            {"bucket_date": "2021-01-01", "count": 0},
            {"bucket_date": "2022-01-01", "count": 2},
        ]

    def test_total_count_matches_input(self) -> None:
        dates = [date(2023, 11, 30), date(2024, 1, 1), date(2024, 1, 31), date(2024, 4, 2)]
        buckets = build_buckets(dates, "month")
        assert sum(b["count"] for b in buckets) == len(dates)
        assert len(buckets) == 6  # Nov 2023 .. Apr 2024

    def test_counts_are_plain_ints(self) -> None:
        buckets = build_buckets([date(2024, 1, 1)], "day")
        assert type(buckets[0]["count"]) is int
