from typing import Optional

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.ui.loading_spinner import SpinnerSize, render_loading_spinner

router = APIRouter()


@router.get("/loading-spinner", response_class=HTMLResponse)
async def loading_spinner(size: SpinnerSize = "md", class_name: Optional[str] = None):
    """Loading indicator fragment for server-rendered admin views."""
    return HTMLResponse(str(render_loading_spinner(size, class_name)))
