# app/schemas/__init__.py
from .documents import (
    Granularity,
    MatchField,
    Bucket,
    DocumentRow,
    ExportRow,
    AggregationResponse,
    SelectedRange,
    MonthTrend,
    ChartPoint,
    DashboardSummary,
)

from .search_term import (
    SearchTermCreate,
    SearchTermUpdate,
    SearchTermOut,
    GroupedSearchTerms,
)
