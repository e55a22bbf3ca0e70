# app/schemas/search_term.py
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SearchTermCreate(BaseModel):
    term: str = ""
    category: Optional[str] = None


class SearchTermUpdate(BaseModel):
    """Omitting `category` keeps the stored value; sending null clears it."""
    term: str = ""
    category: Optional[str] = None


class SearchTermOut(BaseModel):
    id: int
    term: str
    category: Optional[str] = None
    created_date: datetime

    class Config:
        from_attributes = True


class GroupedSearchTerms(BaseModel):
    categories: Dict[str, List[SearchTermOut]] = Field(default_factory=dict)
    uncategorized: List[SearchTermOut] = Field(default_factory=list)
