# backend/app/crud/__init__.py
from .search_term import search_term_crud
from .document import document_crud

__all__ = ["search_term_crud", "document_crud"]
