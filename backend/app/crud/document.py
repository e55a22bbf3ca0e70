# backend/app/crud/document.py
"""
Read-only queries against the externally owned documents table.
Returns raw rows - the aggregation layer shapes them.
"""

from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import Integer, cast, func, or_, select
from sqlalchemy.orm import Session

from app.models import Document
from app.schemas.documents import MatchField

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a term is matched literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def score_label(index: int) -> str:
    return f"score_{index}"


class DocumentCRUD:
    """Database operations for documents"""

    def match_condition(self, terms: Sequence[str], match_field: MatchField = "text"):
        """Case-insensitive substring match of ANY term (OR-ed)."""
        columns = [Document.text]
        if match_field == "text_or_title":
            columns.append(Document.title)

        conditions = []
        for term in terms:
            pattern = f"%{escape_like(term)}%"
            conditions.extend(col.ilike(pattern, escape=LIKE_ESCAPE) for col in columns)
        return or_(*conditions)

    def get_matching_dates(
        self,
        db: Session,
        terms: Sequence[str],
        match_field: MatchField = "text",
    ) -> List[date]:
        """document_date of every matching document (one entry per document)."""
        rows = db.execute(
            select(Document.document_date).where(self.match_condition(terms, match_field))
        ).all()
        return [row[0] for row in rows]

    def get_documents(
        self,
        db: Session,
        terms: Sequence[str],
        match_field: MatchField = "text",
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[tuple]:
        """
        Display projection of matching documents in [start, end].
        Ordered by (document_date, id) so ties are deterministic.
        """
        q = select(
            Document.id,
            Document.title,
            Document.text,
            Document.document_date,
            Document.folder_path,
            Document.file_link,
        ).where(self.match_condition(terms, match_field))
        q = self._apply_range(q, start, end)
        return db.execute(q.order_by(Document.document_date.asc(), Document.id.asc())).all()

    def get_export_rows(
        self,
        db: Session,
        terms: Sequence[str],
        match_field: MatchField = "text",
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[tuple]:
        """
        Export projection: (id, title, document_date, file_link, score_0, score_1, ...)
        with one approximate occurrence count per term, in term order.
        """
        scores = [
            (self._occurrences(Document.text, term) + self._occurrences(Document.title, term)).label(
                score_label(i)
            )
            for i, term in enumerate(terms)
        ]
        q = select(
            Document.id,
            Document.title,
            Document.document_date,
            Document.file_link,
            *scores,
        ).where(self.match_condition(terms, match_field))
        q = self._apply_range(q, start, end)
        return db.execute(q.order_by(Document.document_date.asc(), Document.id.asc())).all()

    def count(self, db: Session) -> int:
        return db.scalar(select(func.count()).select_from(Document)) or 0

    # ---------- Helpers ----------

    def _apply_range(self, q, start: Optional[date], end: Optional[date]):
        if start:
            q = q.where(Document.document_date >= start)
        if end:
            q = q.where(Document.document_date <= end)
        return q

    def _occurrences(self, column, term: str):
        """
        (len(field) - len(field with the term removed)) / len(term), floored.
        Substring approximation, not a tokenized frequency.
        """
        needle = term.lower()
        field = func.coalesce(column, "")
        remainder = func.replace(func.lower(field), needle, "")
        removed = func.length(field, type_=Integer) - func.length(remainder, type_=Integer)
        return cast(removed // len(needle), Integer)


# Create instance
document_crud = DocumentCRUD()
