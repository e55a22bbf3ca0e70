# app/api/api_v1/search_terms.py
import logging
from contextlib import contextmanager

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import StoreError
from app.crud import search_term_crud
from app.schemas import GroupedSearchTerms, SearchTermCreate, SearchTermOut, SearchTermUpdate

logger = logging.getLogger("uvicorn")

router = APIRouter()


@contextmanager
def _store_errors(message: str):
    """Log database failures in full, surface only `message`."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"❌ {message}: {e}")
        raise StoreError(message) from e


@router.get("/search-terms", response_model=list[SearchTermOut])
def list_search_terms(db: Session = Depends(get_db)):
    """All search terms, newest first."""
    with _store_errors("Failed to fetch search terms"):
        return search_term_crud.list(db)


@router.post("/search-terms", response_model=SearchTermOut, status_code=status.HTTP_201_CREATED)
def create_search_term(payload: SearchTermCreate, db: Session = Depends(get_db)):
    with _store_errors("Failed to create search term"):
        return search_term_crud.create(db, payload.term, payload.category)


@router.get("/search-terms/grouped", response_model=GroupedSearchTerms)
def get_grouped_search_terms(db: Session = Depends(get_db)):
    """Terms grouped by category for the term selector."""
    with _store_errors("Failed to fetch search terms"):
        return search_term_crud.grouped(db)


@router.get("/search-terms/{term_id}", response_model=SearchTermOut)
def get_search_term(term_id: int, db: Session = Depends(get_db)):
    with _store_errors("Failed to fetch search term"):
        return search_term_crud.get(db, term_id)


@router.put("/search-terms/{term_id}", response_model=SearchTermOut)
def update_search_term(term_id: int, payload: SearchTermUpdate, db: Session = Depends(get_db)):
    """Replace the term text; category is only touched when present in the body."""
    kwargs = {}
    if "category" in payload.model_fields_set:
        kwargs["category"] = payload.category

    with _store_errors("Failed to update search term"):
        return search_term_crud.update(db, term_id, payload.term, **kwargs)


@router.delete("/search-terms/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_search_term(term_id: int, db: Session = Depends(get_db)):
    with _store_errors("Failed to delete search term"):
        search_term_crud.delete(db, term_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
