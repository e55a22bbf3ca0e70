# File: app/models/__init__.py
from .base import Base
from .document import Document
from .search_term import SearchTerm

__all__ = [
    "Base",
    "Document",
    "SearchTerm",
]
