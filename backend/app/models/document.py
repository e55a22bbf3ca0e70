# File: app/models/document.py
from sqlalchemy import Column, Integer, String, Text, Date, Index
from app.models.base import Base

class Document(Base):
    """Ingested document row. Owned by the ingestion pipeline; read-only here."""
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=True)
    text = Column(Text, nullable=True)
    document_date = Column(Date, nullable=False)  # calendar date, never a timestamp
    folder_path = Column(String, nullable=True)
    file_link = Column(String, nullable=True)

    __table_args__ = (
        Index("idx_documents_date_id", "document_date", "id"),  # (date, id) ordering for drill-down/export
    )
