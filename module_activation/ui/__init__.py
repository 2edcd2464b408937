"""Rich rendering helpers for activation results and errors."""

from .display import render_imports
from .display import render_report
from .error_display import display_activation_error

__all__ = ["display_activation_error", "render_imports", "render_report"]
