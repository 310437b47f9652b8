from app.ui.loading_spinner import render_loading_spinner, SIZE_CLASSES

__all__ = ["render_loading_spinner", "SIZE_CLASSES"]
