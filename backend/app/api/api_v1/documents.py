# app/api/api_v1/documents.py
"""
FastAPI routes for the document aggregation query.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.aggregation import AggregationParams, DocumentAggregator, build_params
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import StoreError
from app.crud import search_term_crud
from app.export import to_csv
from app.schemas import AggregationResponse, Bucket, DocumentRow, ExportRow
from settings import ExportConfig

logger = logging.getLogger("uvicorn")

router = APIRouter()


def _resolve_terms(
    db: Session,
    terms: List[str],
    term: Optional[str],
    category: Optional[str],
) -> List[str]:
    """Explicit terms, the single `term` parameter and every term of `category`, OR-ed."""
    resolved = list(terms or [])
    if term:
        resolved.append(term)
    if category:
        try:
            resolved.extend(search_term_crud.terms_for_category(db, category))
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to resolve category {category!r}: {e}")
            raise StoreError("Failed to fetch search terms") from e
    return resolved


def get_params(
    terms: List[str] = Query([], description="Terms to match (repeatable, OR-ed)"),
    term: Optional[str] = Query(None, description="Single term to match"),
    category: Optional[str] = Query(None, description="Match every stored term of this category"),
    granularity: Optional[str] = Query("day", description="day, month or year"),
    start_date: Optional[str] = Query(None, alias="startDate", description="Start date (inclusive)"),
    end_date: Optional[str] = Query(None, alias="endDate", description="End date (inclusive)"),
    match_field: Optional[str] = Query("text", alias="matchField", description="text or text_or_title"),
    export: bool = Query(False, description="Return the export projection with per-term scores"),
    db: Session = Depends(get_db),
) -> AggregationParams:
    return build_params(
        _resolve_terms(db, terms, term, category),
        granularity=granularity,
        start_date=start_date,
        end_date=end_date,
        match_field=match_field,
        export=export,
        strict_dates=settings.STRICT_DATE_PARSING,
    )


@router.get("/documents", response_model=AggregationResponse)
def get_documents(
    params: AggregationParams = Depends(get_params),
    db: Session = Depends(get_db),
):
    """
    Mention counts per day/month/year for the requested terms.

    - buckets: contiguous series from the first to the last match, zero-filled
    - documents: matching rows when startDate/endDate (or export) is given, else null
    """
    result = DocumentAggregator().aggregate(db, params)

    documents = None
    if result["documents"] is not None:
        row_model = ExportRow if params.export else DocumentRow
        documents = [row_model(**row) for row in result["documents"]]

    return AggregationResponse(
        buckets=[Bucket(**b) for b in result["buckets"]],
        documents=documents,
    )


@router.get("/documents/export.csv")
def export_documents_csv(
    params: AggregationParams = Depends(get_params),
    db: Session = Depends(get_db),
):
    """Matching documents in the export projection as a CSV attachment."""
    params = replace(params, export=True)
    result = DocumentAggregator().aggregate(db, params)

    return Response(
        content=to_csv(result["documents"] or [], params.terms),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{ExportConfig.FILENAME}"'},
    )
