# File: app/aggregation/aggregator.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.aggregation.bucketing import build_buckets
from app.aggregation.params import AggregationParams
from app.analytics.table import format_customer_label
from app.core.config import settings
from app.core.errors import StoreError
from app.crud import document_crud
from app.crud.document import score_label

logger = logging.getLogger("uvicorn")


class DocumentAggregator:
    """
    Bucketed mention counts for a set of OR-ed terms, plus the matching
    documents when a date range (or export) is requested.
    """

    def __init__(self, customer_marker: Optional[str] = None):
        self.customer_marker = customer_marker if customer_marker is not None else settings.CUSTOMER_PATH_MARKER

    def aggregate(self, db: Session, params: AggregationParams) -> Dict[str, Any]:
        try:
            dates = document_crud.get_matching_dates(db, params.terms, params.match_field)
            buckets = build_buckets(dates, params.granularity)

            documents = None
            if params.wants_documents:
                if params.export:
                    documents = self._export_rows(db, params)
                else:
                    documents = self._display_rows(db, params)

        except SQLAlchemyError as e:
            logger.error(f"❌ Document aggregation failed for terms={list(params.terms)}: {e}")
            import traceback
            logger.error(f"Full traceback: {traceback.format_exc()}")
            raise StoreError("Failed to fetch documents from the database") from e

        logger.debug(
            f"📊 terms={list(params.terms)} granularity={params.granularity} "
            f"matches={len(dates)} buckets={len(buckets)} "
            f"documents={None if documents is None else len(documents)}"
        )
        return {"buckets": buckets, "documents": documents}

    def _display_rows(self, db: Session, params: AggregationParams) -> List[Dict[str, Any]]:
        rows = document_crud.get_documents(
            db, params.terms, params.match_field, params.start_date, params.end_date
        )
        return [
            {
                "id": r.id,
                "title": r.title,
                "text": r.text,
                "document_date": r.document_date,
                "folder_path": r.folder_path,
                "customer": format_customer_label(r.folder_path, self.customer_marker),
                "file_link": r.file_link,
            }
            for r in rows
        ]

    def _export_rows(self, db: Session, params: AggregationParams) -> List[Dict[str, Any]]:
        rows = document_crud.get_export_rows(
            db, params.terms, params.match_field, params.start_date, params.end_date
        )
        out = []
        for r in rows:
            mapping = r._mapping
            out.append({
                "id": mapping["id"],
                "title": mapping["title"],
                "document_date": mapping["document_date"],
                "file_link": mapping["file_link"],
                "scores": {
                    term: int(mapping[score_label(i)] or 0)
                    for i, term in enumerate(params.terms)
                },
            })
        return out
