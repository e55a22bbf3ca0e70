# backend/app/crud/search_term.py
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models import SearchTerm

_UNSET = object()


def _clean_term(term: Optional[str]) -> str:
    cleaned = (term or "").strip()
    if not cleaned:
        raise ValidationError("term is required")
    return cleaned


def _clean_category(category: Optional[str]) -> Optional[str]:
    cleaned = (category or "").strip()
    return cleaned or None


class SearchTermCRUD:
    """Database operations for stored search terms"""

    def list(self, db: Session) -> List[SearchTerm]:
        """All terms, newest first."""
        return list(
            db.scalars(
                select(SearchTerm).order_by(SearchTerm.created_date.desc(), SearchTerm.id.desc())
            ).all()
        )

    def get(self, db: Session, term_id: int) -> SearchTerm:
        row = db.get(SearchTerm, term_id)
        if row is None:
            raise NotFoundError(f"Search term {term_id} not found")
        return row

    def create(self, db: Session, term: Optional[str], category: Optional[str] = None) -> SearchTerm:
        term = _clean_term(term)
        category = _clean_category(category)
        self._ensure_unique(db, term, category)

        row = SearchTerm(term=term, category=category)
        db.add(row)
        self._commit(db)
        db.refresh(row)
        return row

    def update(self, db: Session, term_id: int, term: Optional[str], category=_UNSET) -> SearchTerm:
        """
        Replace the term text and, when given, the category.
        Leaving `category` unset keeps the stored category; None clears it.
        """
        term = _clean_term(term)
        row = self.get(db, term_id)

        new_category = row.category if category is _UNSET else _clean_category(category)
        self._ensure_unique(db, term, new_category, exclude_id=row.id)

        row.term = term
        row.category = new_category
        db.add(row)
        self._commit(db)
        db.refresh(row)
        return row

    def delete(self, db: Session, term_id: int) -> None:
        row = self.get(db, term_id)
        db.delete(row)
        self._commit(db)

    def grouped(self, db: Session) -> Dict[str, object]:
        """Terms grouped by category (sorted by name) plus the uncategorized rest."""
        categories: Dict[str, List[SearchTerm]] = {}
        uncategorized: List[SearchTerm] = []
        for row in self.list(db):
            if row.category:
                categories.setdefault(row.category, []).append(row)
            else:
                uncategorized.append(row)

        return {
            "categories": {name: categories[name] for name in sorted(categories, key=str.lower)},
            "uncategorized": uncategorized,
        }

    def terms_for_category(self, db: Session, category: str) -> List[str]:
        """Term texts stored under a category, matched case-insensitively."""
        cleaned = _clean_category(category)
        if cleaned is None:
            return []
        return list(
            db.scalars(
                select(SearchTerm.term)
                .where(func.lower(SearchTerm.category) == cleaned.lower())
                .order_by(SearchTerm.id)
            ).all()
        )

    # ---------- Helpers ----------

    def _ensure_unique(
        self,
        db: Session,
        term: str,
        category: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        """Same text within the same category (null included) is a duplicate."""
        query = select(SearchTerm.id).where(func.lower(SearchTerm.term) == term.lower())
        if category is None:
            query = query.where(SearchTerm.category.is_(None))
        else:
            query = query.where(func.lower(SearchTerm.category) == category.lower())
        if exclude_id is not None:
            query = query.where(SearchTerm.id != exclude_id)

        if db.scalar(query.limit(1)) is not None:
            raise ValidationError(f"term '{term}' already exists")

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise


# Create instance
search_term_crud = SearchTermCRUD()
