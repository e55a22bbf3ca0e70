# File: app/client/store.py
"""
Client-side dashboard state.

Each remote dependency (terms, chart, documents) has its own LoadState that
moves idle -> loading -> success | error. Derived values (chart points,
KPI summary, table page) are computed from the held data on demand.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from app.aggregation.params import GRANULARITIES
from app.analytics import chart_points as build_chart_points
from app.analytics import build_file_link, filter_documents, paginate, selected_range, summarize
from app.client.dashboard_client import ApiError, DashboardClient
from app.core.config import settings
from app.export import to_csv
from app.schemas import ChartPoint, DashboardSummary, SelectedRange

logger = logging.getLogger("uvicorn")

CATEGORY_PREFIX = "category:"


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class LoadState:
    status: LoadStatus = LoadStatus.IDLE
    error: Optional[str] = None

    def start(self) -> None:
        self.status = LoadStatus.LOADING
        self.error = None

    def succeed(self) -> None:
        self.status = LoadStatus.SUCCESS
        self.error = None

    def fail(self, message: str) -> None:
        self.status = LoadStatus.ERROR
        self.error = message

    def reset(self) -> None:
        self.status = LoadStatus.IDLE
        self.error = None


@dataclass
class DashboardStore:
    client: DashboardClient
    granularity: str = "day"
    customer_marker: Optional[str] = None
    file_link_base_url: Optional[str] = None
    open_files_in_web: bool = False

    terms: List[Dict[str, Any]] = field(default_factory=list)
    selected_term_id: Optional[str] = None
    buckets: List[Dict[str, Any]] = field(default_factory=list)
    documents: List[Dict[str, Any]] = field(default_factory=list)
    selected_range: Optional[Dict[str, Any]] = None
    table_query: str = ""
    table_page: int = 1

    terms_state: LoadState = field(default_factory=LoadState)
    chart_state: LoadState = field(default_factory=LoadState)
    documents_state: LoadState = field(default_factory=LoadState)

    # ---------- Terms ----------

    def load_terms(self) -> None:
        self.terms_state.start()
        try:
            self.terms = self.client.list_terms()
        except ApiError as e:
            logger.warning(f"⚠️ Unable to load search terms: {e.message}")
            self.terms_state.fail("Unable to load search terms")
            return
        self.terms_state.succeed()

    def categories(self) -> List[str]:
        names = {t["category"] for t in self.terms if t.get("category")}
        return sorted(names, key=str.lower)

    def selected_terms(self) -> List[str]:
        """Term texts behind the current selection (one term or a whole category)."""
        if not self.selected_term_id:
            return []
        if self.selected_term_id.startswith(CATEGORY_PREFIX):
            category = self.selected_term_id[len(CATEGORY_PREFIX):].lower()
            return [t["term"] for t in self.terms if (t.get("category") or "").lower() == category]
        return [t["term"] for t in self.terms if str(t["id"]) == self.selected_term_id]

    def select_term(self, term_id) -> None:
        """Select a term id or 'category:<name>' and load its chart."""
        self.selected_term_id = str(term_id) if term_id is not None else None
        self.clear_selection()
        self.buckets = []
        if self.selected_terms():
            self.load_chart()
        else:
            self.chart_state.reset()

    # ---------- Chart ----------

    def set_granularity(self, granularity: str) -> None:
        if granularity not in GRANULARITIES:
            raise ValueError(f"Unknown granularity: {granularity}")
        self.granularity = granularity
        self.clear_selection()
        if self.selected_terms():
            self.load_chart()

    def load_chart(self) -> None:
        self.chart_state.start()
        self.buckets = []
        try:
            self.buckets = self.client.fetch_buckets(self.selected_terms(), granularity=self.granularity)
        except ApiError as e:
            logger.warning(f"⚠️ Could not fetch document trends: {e.message}")
            self.chart_state.fail("Could not fetch document trends")
            return
        self.chart_state.succeed()

    def chart_points(self) -> List[Dict[str, Any]]:
        return [ChartPoint(**p).model_dump() for p in build_chart_points(self.buckets, self.granularity)]

    def summary(self) -> Dict[str, Any]:
        return DashboardSummary(**summarize(self.buckets)).model_dump()

    # ---------- Drill-down ----------

    def select_bucket(self, bucket: Dict[str, Any]) -> None:
        """Fetch the documents behind a clicked bucket."""
        terms = self.selected_terms()
        if not terms:
            return

        picked = selected_range(bucket["bucket_date"], bucket["count"], self.granularity)
        self.selected_range = SelectedRange(**picked).model_dump()
        self.documents = []
        self.table_query = ""
        self.table_page = 1
        self.documents_state.start()
        try:
            self.documents = self.client.fetch_documents(
                terms,
                self.selected_range["start_date"],
                self.selected_range["end_date"],
                granularity=self.granularity,
            )
        except ApiError as e:
            logger.warning(f"⚠️ Could not fetch matching documents: {e.message}")
            self.documents_state.fail("Could not fetch matching documents")
            return
        self.documents_state.succeed()

    def clear_selection(self) -> None:
        self.selected_range = None
        self.documents = []
        self.table_query = ""
        self.table_page = 1
        self.documents_state.reset()

    # ---------- Table ----------

    def set_table_query(self, query: str) -> None:
        self.table_query = query
        self.table_page = 1

    def set_table_page(self, page: int) -> None:
        self.table_page = page

    def table_view(self) -> Dict[str, Any]:
        filtered = filter_documents(self.documents, self.table_query, self.customer_marker)
        view = paginate(filtered, self.table_page)
        self.table_page = view["page"]

        base_url = self.file_link_base_url if self.file_link_base_url is not None else settings.FILE_LINK_BASE_URL
        view["items"] = [
            {**doc, "link": build_file_link(doc.get("file_link"), base_url, self.open_files_in_web)}
            for doc in view["items"]
        ]
        return view

    # ---------- Export ----------

    def export_csv(self) -> str:
        """CSV of the selected range (or every match when nothing is selected)."""
        terms = self.selected_terms()
        if not terms:
            raise ValueError("Select a term before exporting")

        start = self.selected_range["start_date"] if self.selected_range else None
        end = self.selected_range["end_date"] if self.selected_range else None
        rows = self.client.fetch_export(terms, start, end)
        return to_csv(rows, terms)
