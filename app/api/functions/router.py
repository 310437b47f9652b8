from fastapi import APIRouter

from app.api.functions import get_analytics

functions_router = APIRouter()

functions_router.include_router(get_analytics.router, tags=["functions"])
