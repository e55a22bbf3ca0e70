# app/schemas/documents.py
"""
Pydantic schemas for the document aggregation endpoint.
"""

from datetime import date
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# Time unit used to group document dates
Granularity = Literal["day", "month", "year"]

# Which document fields a term is matched against
MatchField = Literal["text", "text_or_title"]


class Bucket(BaseModel):
    """One period of the contiguous timeline with its match count."""
    bucket_date: str = Field(..., description="Start of period, YYYY-MM-DD")
    count: int = Field(..., ge=0)


class DocumentRow(BaseModel):
    """Display projection of a matching document."""
    id: int
    title: Optional[str] = None
    text: Optional[str] = None
    document_date: date
    folder_path: Optional[str] = None
    customer: str = Field("", description="Origin label derived from folder_path")
    file_link: Optional[str] = None

    class Config:
        extra = "forbid"


class ExportRow(BaseModel):
    """Export projection with one approximate occurrence count per term."""
    id: int
    title: Optional[str] = None
    document_date: date
    file_link: Optional[str] = None
    scores: Dict[str, int] = Field(default_factory=dict)

    class Config:
        extra = "forbid"  # keeps the display/export union unambiguous


class AggregationResponse(BaseModel):
    buckets: List[Bucket]
    documents: Optional[List[Union[ExportRow, DocumentRow]]] = None


class SelectedRange(BaseModel):
    """Date range covered by a clicked bucket."""
    start_date: date
    end_date: date
    label: str
    count: int


class MonthTrend(BaseModel):
    total_count: int
    added_last_30: int
    base_before_30: int
    percent_change: Optional[int] = None


class ChartPoint(Bucket):
    label: str
    trend: float


class DashboardSummary(BaseModel):
    total_mentions: int
    periods_with_mentions: int
    peak: Optional[Bucket] = None
    month_trend: MonthTrend
