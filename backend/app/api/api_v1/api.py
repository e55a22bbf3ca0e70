from fastapi import APIRouter
from app.api.api_v1 import documents, search_terms


api_router = APIRouter()

api_router.include_router(documents.router, prefix="", tags=["documents"])
api_router.include_router(search_terms.router, prefix="", tags=["search-terms"])
