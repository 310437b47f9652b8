"""
Admin API Router

Combines all admin endpoints under /api/admin.
"""

from fastapi import APIRouter

from app.api.admin import dashboard_analytics, settings

admin_router = APIRouter()

admin_router.include_router(dashboard_analytics.router, tags=["analytics"])
admin_router.include_router(settings.router, prefix="/settings", tags=["settings"])
