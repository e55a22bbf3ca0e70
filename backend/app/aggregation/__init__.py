# File: app/aggregation/__init__.py
from .params import AggregationParams, build_params, normalize_date, normalize_terms, GRANULARITIES
from .bucketing import build_buckets, truncate_date
from .aggregator import DocumentAggregator
