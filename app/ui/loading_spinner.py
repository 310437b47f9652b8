"""Loading indicator markup for the admin console."""

from typing import Literal, Optional

from markupsafe import Markup

SpinnerSize = Literal["sm", "md", "lg"]

BASE_CLASSES = "animate-spin rounded-full border-primary border-t-transparent"

SIZE_CLASSES = {
    "sm": "w-4 h-4 border-2",
    "md": "w-6 h-6 border-2",
    "lg": "w-10 h-10 border-3",
}

SPINNER_TEMPLATE = Markup(
    '<div class="{classes}" role="status" aria-label="Loading">'
    '<span class="sr-only">Loading...</span>'
    '</div>'
)


def spinner_classes(size: SpinnerSize = "md", class_name: Optional[str] = None) -> str:
    # Unknown sizes raise KeyError; callers pass one of SIZE_CLASSES
    parts = [BASE_CLASSES, SIZE_CLASSES[size]]
    if class_name:
        parts.append(class_name)
    return " ".join(parts)


def render_loading_spinner(size: SpinnerSize = "md", class_name: Optional[str] = None) -> Markup:
    """Render the spinning ring; `class_name` is escaped into the class attribute."""
    return SPINNER_TEMPLATE.format(classes=spinner_classes(size, class_name))
